# type: ignore
''' Instruction line grammar '''

import pyparsing as pp

from asmvm.common.conf import COMMENT_CHAR, QUOTE_CHAR
from asmvm.runtime.instructions import Value, Text


comment = pp.Suppress(pp.Literal(COMMENT_CHAR) + pp.rest_of_line)
separator = pp.Suppress(pp.Optional(','))

# Anything up to whitespace, comma, comment or quote
bare = pp.Regex(f"[^\\s,{COMMENT_CHAR}{QUOTE_CHAR}]+")

text = pp.QuotedString(QUOTE_CHAR, convert_whitespace_escapes=False).set_parse_action(lambda r: Text(r[0]))
value = bare.copy().set_parse_action(lambda r: Value(r[0]))
operand = text | value

opcode = bare.copy()
instruction = opcode + pp.ZeroOrMore(separator + operand) + separator

line = pp.Optional(instruction) + pp.Optional(comment)
