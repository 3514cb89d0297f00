from enum import IntFlag

# Data
MOV = 'mov'  # V1 -> R1
INC = 'inc'  # R1 + 1 -> R1
DEC = 'dec'  # R1 - 1 -> R1

# Arithmetic
ADD = 'add'  # R1 +  V1 -> R1
SUB = 'sub'  # R1 -  V1 -> R1
MUL = 'mul'  # R1 *  V1 -> R1
DIV = 'div'  # R1 /  V1 -> R1 (truncated)

# Flow
JNZ = 'jnz'  # if V1 .ne 0 -> PC + V2
CMP = 'cmp'  # V1 <=> V2 -> flags
JE = 'je'    # if EQ jmp L1
JNE = 'jne'  # if NE jmp L1
JG = 'jg'    # if GT jmp L1
JGE = 'jge'  # if GE jmp L1
JL = 'jl'    # if LT jmp L1
JLE = 'jle'  # if LE jmp L1
CALL = 'call'  # push PC + 1; jmp L1
RET = 'ret'    # jmp [pop]
LABEL = 'label'  # L1 -> PC + 1 (pre-pass only)
END = 'end'      # halt, keep output

# Output
MSG = 'msg'  # T1|V1 ... -> output


class Flag(IntFlag):
    ''' Comparison status register '''
    EQUAL = 0b000001
    NOT_EQUAL = 0b000010
    GREATER_OR_EQUAL = 0b000100
    GREATER = 0b001000
    LESS_OR_EQUAL = 0b010000
    LESS = 0b100000


INVALID = Flag(0)

JUMP_FLAGS = {
    JE: Flag.EQUAL,
    JNE: Flag.NOT_EQUAL,
    JG: Flag.GREATER,
    JGE: Flag.GREATER_OR_EQUAL,
    JL: Flag.LESS,
    JLE: Flag.LESS_OR_EQUAL
}

ARITHMETIC = (ADD, SUB, MUL, DIV)
