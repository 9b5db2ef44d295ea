"""logtest application layer.

Signature parser, code synthesizer, expander and reporters.
"""

from logtest.application.expander import expand, expand_file, expand_source
from logtest.application.signature_parser import parse
from logtest.application.synthesizer import synthesize
from logtest.application.type_parser import parse_type

__all__ = [
    "expand",
    "expand_file",
    "expand_source",
    "parse",
    "parse_type",
    "synthesize",
]
