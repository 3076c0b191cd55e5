"""On-disk container format for saved ASCII frames."""

from .codec import ContainerWriter, decode_record, encode_record, iter_records, read_frames

__all__ = [
    "ContainerWriter",
    "decode_record",
    "encode_record",
    "iter_records",
    "read_frames",
]
