from .assemble import assemble_body
from .assemble import assemble_request_head
from .assemble import assemble_response_head
from .read import read_request_line
from .read import read_response_line
from .read import split_message

__all__ = [
    "split_message",
    "read_request_line",
    "read_response_line",
    "assemble_request_head",
    "assemble_response_head",
    "assemble_body",
]
