from UpdatePatches import Error, config
from UpdatePatches.util import execcmd
import tempfile
import shutil
import os

__all__ = ["FilterDiff"]

class FilterDiff(object):
    """patchutils' filterdiff, used to drop files from patches"""
    def __init__(self, command=None, exclude=None):
        self.command = command or config.get("filterdiff", "command",
                "filterdiff")
        self.exclude = exclude or config.get("filterdiff", "exclude", "*/.*")

    def check(self):
        status, output = execcmd(self.command, os.devnull, noerror=True)
        if status != 0:
            raise Error("Please install patchutils")

    def filter(self, path):
        """Rewrite the patch at path without the excluded files.

        The patch keeps its name, even when nothing is left in it.
        """
        dirname, basename = os.path.split(os.path.abspath(path))
        fd, tmppath = tempfile.mkstemp(prefix=basename + ".", dir=dirname)
        try:
            with os.fdopen(fd, "w") as tmp:
                execcmd(self.command, "-x", self.exclude, path, outfile=tmp)
            shutil.copymode(path, tmppath)
            os.replace(tmppath, path)
        finally:
            if os.path.exists(tmppath):
                os.unlink(tmppath)

# vim:et:ts=4:sw=4
