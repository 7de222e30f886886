#
# semi2colon
#
# copies input to output, replacing all ';' by ':'
# works on binary data, input/output default to stdin/stdout
#
import os, sys
import contextlib

import cli_template
import swapbytelib


class Tool(cli_template.Template):
    _MODULE_FILE = sys.executable if getattr(sys, 'frozen', False) else __file__
    _PROGRAM_NAME = os.path.basename(_MODULE_FILE)
    _DESCRIPTION = "copy input to output, replacing ';' by ':'"

    def __init__(self):
        super().__init__()
        self.bytes_copied = None

    def __open_input(self):
        if self._input is None:
            if sys.stdin.isatty():
                self._message("reading from terminal, end input with EOF")
            return contextlib.nullcontext(sys.stdin.buffer)
        return open(self._input, "rb")

    def __open_output(self):
        if self._output is None:
            return contextlib.nullcontext(sys.stdout.buffer)
        if self._input is not None and os.path.exists(self._output) and os.path.samefile(self._input, self._output):
            # opening for write would truncate the input
            self._error("input and output are the same file ({})".format(self._output))
        return open(self._output, "wb")

    def _doit(self):
        # input first: output must not be created if input cannot be opened
        with self.__open_input() as source:
            with self.__open_output() as sink:
                self.bytes_copied = swapbytelib.fixing_copy(source, sink)
        return 0

    def _define_args(self, parser):
        parser.add_argument("input=", "specify the input file (default: stdin)")
        parser.add_argument("output=", "specify the output file (default: stdout)")


if __name__ == '__main__':
    """
        Description :
            Main application body
    """

    o = Tool()
    rc = o._init_from_sys_args()
    sys.exit(rc)
