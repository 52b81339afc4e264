import tempfile

from . import ConfigParser

config = ConfigParser.Config()
tempfile.tempdir = config.get("global", "tempdir", None) or None # when ""
del ConfigParser

class Error(Exception): pass

class SilentError(Error): pass

class CommandError(Error):
    def __init__(self, msg, status=1):
        Error.__init__(self, msg)
        self.status = status

# vim:et:ts=4:sw=4
