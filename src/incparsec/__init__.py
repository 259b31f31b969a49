"""
Public API.
"""

from . import lexer, partial, primitive, sequence, text
from .core.buffer import (
    BufferedCursor, BufferLimitExceeded, Mark, Ring, StaleCheckpoint
)
from .core.cursor import Cursor, SequenceCursor
from .core.errors import (
    END_OF_INPUT, Errors, Expected, Item, Label, Message, Opaque, Unexpected,
    expect, merge
)
from .core.result import Outcome
from .core.source import PartialCursor, PartialSource
from .core.types import Loc
from .output import ParseError, ParseResult
from .parser import (
    Delay, Parser, Tuple2, Tuple3, Tuple4, TupleParser, alt, and_then,
    attempt, between, bind, chainl1, chainr1, fmap, label, lookahead, many,
    many1, maybe, recognize, run, sep_by, sep_by1, seq, seql, seqr, try_fmap
)
from .partial import (
    Done, Failed, IncrementalParser, NeedsMoreInput, ResumeToken, resume,
    run_partial
)

__all__ = (
    "lexer", "partial", "primitive", "sequence", "text",
    "BufferedCursor", "BufferLimitExceeded", "Mark", "Ring",
    "StaleCheckpoint",
    "Cursor", "SequenceCursor",
    "END_OF_INPUT", "Errors", "Expected", "Item", "Label", "Message", "Opaque",
    "Unexpected", "expect", "merge",
    "Outcome",
    "PartialCursor", "PartialSource",
    "Loc",
    "ParseError", "ParseResult",

    "Delay", "Parser", "Tuple2", "Tuple3", "Tuple4", "TupleParser", "alt",
    "and_then", "attempt", "between", "bind", "chainl1", "chainr1", "fmap",
    "label", "lookahead", "many", "many1", "maybe", "recognize", "run",
    "sep_by", "sep_by1", "seq", "seql", "seqr", "try_fmap",

    "Done", "Failed", "IncrementalParser", "NeedsMoreInput", "ResumeToken",
    "resume", "run_partial"
)

__version__ = "0.1.0"
