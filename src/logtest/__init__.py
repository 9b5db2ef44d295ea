"""logtest - expand #[logtest] Rust test functions with logger initialization."""

__version__ = "0.1.0"

from logtest.application import expand, expand_file, expand_source, parse, synthesize
from logtest.domain.exceptions import LogTestError, MalformedSignatureError

__all__ = [
    "LogTestError",
    "MalformedSignatureError",
    "__version__",
    "expand",
    "expand_file",
    "expand_source",
    "parse",
    "synthesize",
]
