from UpdatePatches import Error, config
from UpdatePatches.util import execcmd
import os

__all__ = ["FedPkg", "find_pkgtool"]

class FedPkg(object):
    """A fedpkg-like packaging tool (fedpkg, rhpkg, centpkg...)"""
    def __init__(self, command="fedpkg", path=os.path.curdir):
        self.command = command
        self.path = path

    def __repr__(self):
        return "<FedPkg %s>" % self.command

    def available(self):
        status, output = execcmd(self.command, "--help", cwd=self.path,
                noerror=True)
        return status == 0

    def gimmespec(self):
        status, output = execcmd(self.command, "gimmespec", cwd=self.path)
        # the spec file name is the last line, anything before is noise
        # such as deprecation warnings
        lines = output.strip().splitlines()
        if not lines:
            raise Error("%s gimmespec did not return a spec file"
                    % self.command)
        return lines[-1].strip()

def find_pkgtool(path=os.path.curdir):
    """Returns the first packaging tool from pkg-commands that works"""
    commands = config.getlist("global", "pkg-commands", ["fedpkg", "rhpkg"])
    for command in commands:
        pkgtool = FedPkg(command, path)
        if pkgtool.available():
            return pkgtool
    if commands == ["fedpkg", "rhpkg"]:
        raise Error("Neither fedpkg or rhpkg found")
    raise Error("none of %s found" % ", ".join(commands))

# vim:et:ts=4:sw=4
