INT32_MIN = -0x80000000
INT32_MAX = 0x7FFFFFFF
INT32_MASK = 0xFFFFFFFF

COMMENT_CHAR = ';'
QUOTE_CHAR = "'"
LABEL_SUFFIX = ':'

# Program wrapper pairs stripped by the sanitizer
WRAPPERS = {
    '(': ')',
    '[': ']',
    '{': '}'
}

# Result of a text program that never reached 'end'
NO_RESULT = '-1'


class RunSettings:
    verbose: bool
    max_steps: int | None

    def __init__(self):
        self.verbose = False
        self.max_steps = None   # No guard rail by default

    def update(
        self,
        verbose: bool | None = None,
        max_steps: int | None = None
    ):
        if verbose is not None:
            self.verbose = verbose

        if max_steps is not None:
            self.max_steps = max_steps

        return self
