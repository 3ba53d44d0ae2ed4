from .builder import GraphQuery
from .decoder import decode_hierarchy, decode_reply
from .dedup import remove_duplicates
from .labels import LabelFilter, compile_label_filter

__all__ = [
    "GraphQuery",
    "LabelFilter",
    "compile_label_filter",
    "decode_hierarchy",
    "decode_reply",
    "remove_duplicates",
]
