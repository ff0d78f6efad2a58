"""Protocol layer: frame layout, field validation and command builders."""

from .framing import PREAMBLE, Frame, build_frame, parse_frame
from .fields import FieldResult, check_credential, check_ipv4, check_key_type
from .commands import (
    Command,
    build_command,
    build_set_all,
    build_set_gateway,
    build_set_interface,
    build_set_ip,
    build_set_subnet_mask,
    build_set_wifi,
    build_text_line,
    describe_frame,
)
