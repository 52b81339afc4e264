from UpdatePatches import SilentError, CommandError, Error
import optparse
import sys

__all__ = ["OptionParser", "do_command"]

class OptionParser(optparse.OptionParser):

    def __init__(self, usage=None, help=None, **kwargs):
        optparse.OptionParser.__init__(self, usage, **kwargs)
        self._overload_help = help

    def format_help(self, formatter=None):
        if self._overload_help:
            return self._overload_help
        else:
            return optparse.OptionParser.format_help(self, formatter)

    def error(self, msg):
        raise Error(msg)

def do_command(parse_options_func, main_func):
    try:
        opt = parse_options_func()
        main_func(**opt.__dict__)
    except SilentError:
        sys.exit(1)
    except CommandError as e:
        sys.stderr.write("error: %s\n" % str(e))
        sys.exit(e.status or 1)
    except Error as e:
        sys.stderr.write("error: %s\n" % str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        sys.stderr.write("interrupted\n")
        sys.stderr.flush()
        sys.exit(1)

# vim:et:ts=4:sw=4
