# scaling_controller/dispatch/codec.py
"""Wire codec for deploy commands.

A message is the node name, network name and instance type name, in that
order. Each field is UTF-8 text prefixed by its byte length as an unsigned
16-bit big-endian integer. No version tag, no checksum.
"""

import struct
from typing import List

from scaling_controller.core.errors import DeployEncodingError
from scaling_controller.core.models import DeployCommand

_LENGTH = struct.Struct(">H")
MAX_FIELD_BYTES = 0xFFFF


def encode_string(value: str) -> bytes:
    """Encode one length-prefixed field."""
    if not isinstance(value, str):
        raise DeployEncodingError(f"Field must be str, got {type(value).__name__}")
    if not value:
        raise DeployEncodingError("Field must not be empty")

    try:
        raw = value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise DeployEncodingError(f"Field is not valid UTF-8: {value!r}") from e

    if len(raw) > MAX_FIELD_BYTES:
        raise DeployEncodingError(
            f"Field is {len(raw)} bytes, limit is {MAX_FIELD_BYTES}"
        )

    return _LENGTH.pack(len(raw)) + raw


def encode_deploy_command(command: DeployCommand) -> bytes:
    """Encode a deploy command into a message payload."""
    return b"".join(encode_string(value) for value in command.fields())


def decode_deploy_command(payload: bytes) -> DeployCommand:
    """Decode a payload produced by encode_deploy_command."""
    fields: List[str] = []
    offset = 0

    for _ in range(3):
        if offset + _LENGTH.size > len(payload):
            raise DeployEncodingError("Truncated payload: missing field length")
        (length,) = _LENGTH.unpack_from(payload, offset)
        offset += _LENGTH.size

        if offset + length > len(payload):
            raise DeployEncodingError("Truncated payload: field shorter than its length")
        try:
            fields.append(payload[offset:offset + length].decode("utf-8"))
        except UnicodeDecodeError as e:
            raise DeployEncodingError("Field is not valid UTF-8") from e
        offset += length

    if offset != len(payload):
        raise DeployEncodingError(f"Unexpected {len(payload) - offset} trailing byte(s)")

    return DeployCommand(node_name=fields[0], network_name=fields[1], type_name=fields[2])
