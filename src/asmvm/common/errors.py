class MachineError(Exception):
    ''' Base of all fatal interpreter errors '''
    pass


class ParseError(MachineError):
    lineno: int | None

    def __init__(self, message: str, lineno: int | None = None):
        if lineno is not None:
            message = f'line {lineno}: {message}'

        super().__init__(message)
        self.lineno = lineno


class UndefinedRegister(MachineError):
    def __init__(self, name: str):
        super().__init__(f'Undefined register {name}')
        self.name = name


class UndefinedLabel(MachineError):
    def __init__(self, name: str):
        super().__init__(f'Undefined label {name}')
        self.name = name


class DivisionByZero(MachineError):
    pass


class StackUnderflow(MachineError):
    pass


class MachineHalted(MachineError):
    pass


class StepLimitExceeded(MachineError):
    def __init__(self, steps: int):
        super().__init__(f'Step limit of {steps} exceeded')
        self.steps = steps
