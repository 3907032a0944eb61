# output_manager.py

from primefrac.fmt import strip_ansi


class OutputManager:
    """
    Handles all result printing to the screen.

    Usage:
        om = OutputManager()
        om.write("Hello")   # prints and keeps a transcript
        om.getvalue()       # everything written so far

        om = OutputManager(quiet=True)   # transcript only, nothing on screen
    """

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self._buffer: list[str] = []

    def write(self, *args, sep: str = " ", end: str = "\n") -> None:
        """Write to screen (unless quiet) and to the transcript."""
        text = sep.join(str(a) for a in args) + end
        self._buffer.append(text)
        if not self.quiet:
            print(text, end="")

    def write_screen(self, *args, sep: str = " ", end: str = "\n", flush: bool = True) -> None:
        """Write only to the screen, never to the transcript."""
        if self.quiet:
            return
        print(*args, sep=sep, end=end, flush=flush)

    def getvalue(self, plain: bool = False) -> str:
        """Returns everything written; `plain` strips color codes."""
        text = "".join(self._buffer)
        return strip_ansi(text) if plain else text

    def close(self) -> None:
        self._buffer.clear()
