import logging as lg
from dataclasses import dataclass

import pyparsing as pp

import asmvm.sasm.grammar as grammar
from asmvm.common.conf import WRAPPERS
from asmvm.common.errors import ParseError
from asmvm.runtime.instructions import Operands


@dataclass(frozen=True)
class SourceLine:
    opcode: str
    operands: Operands
    lineno: int


def strip_wrapper(raw: str) -> str:
    stripped = raw.strip()

    if len(stripped) >= 2 and WRAPPERS.get(stripped[0]) == stripped[-1]:
        return stripped[1:-1]

    return raw


def tokenize_line(line: str, lineno: int = 0) -> SourceLine | None:
    ''' Comment-stripped tokens of a single line, None for blank lines '''
    try:
        tokens = grammar.line.parse_string(line.lstrip(), parse_all=True)
    except pp.ParseException as e:
        raise ParseError(f'Cannot tokenize {line.strip()!r}: {e.msg}', lineno) from e

    if not tokens:
        return None

    opcode, *operands = tokens
    return SourceLine(str(opcode), tuple(operands), lineno)


def sanitize(raw: str) -> list[SourceLine]:
    lines = []

    for lineno, text in enumerate(strip_wrapper(raw).splitlines(), start=1):
        source_line = tokenize_line(text, lineno)

        if source_line is not None:
            lines.append(source_line)

    lg.debug(f'Sanitized {len(lines)} instruction lines')
    return lines
