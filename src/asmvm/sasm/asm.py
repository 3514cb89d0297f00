import logging as lg
from typing import Sequence

import asmvm.runtime.instructions as ins
from asmvm.sasm.sanitizer import sanitize, tokenize_line
from asmvm.sasm.decoder import decode_all


def assemble(raw: str) -> ins.Program:
    ''' Full program text: wrapped, commented, with quoted literals '''
    program = decode_all(sanitize(raw))
    lg.info(f'Assembled {len(program)} instructions')
    return program


def assemble_lines(raw_lines: Sequence[str]) -> ins.Program:
    ''' One instruction per element, no wrapper '''
    lines = [
        line
        for line in (tokenize_line(text, lineno) for lineno, text in enumerate(raw_lines, start=1))
        if line is not None
    ]

    program = decode_all(lines)
    lg.info(f'Assembled {len(program)} instructions')
    return program
