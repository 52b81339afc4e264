from UpdatePatches import Error, config
from UpdatePatches.VCS import VCS
import os

__all__ = ["GIT"]

class GIT(VCS):
    vcs_name = "git"
    def __init__(self, path=os.path.curdir):
        VCS.__init__(self, path)
        self.vcs_command = config.getlist("global", "git-command", ["git"])
        self._format_patch_opts = None

    def status(self):
        status, output = self._execVcs("status", "--porcelain", "-uno")
        return [(x[:2], x[3:]) for x in output.splitlines() if x]

    def is_clean(self):
        # untracked files do not count, they are never committed
        return not self.status()

    def current_branch(self):
        status, output = self._execVcs("symbolic-ref", "-q", "--short",
                "HEAD", noerror=True)
        if status != 0 or not output:
            raise Error("not on a branch, aborting")
        return output.strip()

    def checkout(self, branch):
        return self._execVcs("checkout", "-q", branch)

    def commit(self, *paths, **kwargs):
        cmd = ["commit", "-q"]
        if kwargs.get("allow_empty"):
            cmd.append("--allow-empty")
        if kwargs.get("amend"):
            cmd.append("--amend")
        if kwargs.get("all"):
            cmd.append("-a")
        self._add_log(cmd, kwargs)
        if paths:
            cmd.append("--")
            cmd.extend(paths)
        return self._execVcs(*cmd)

    def ancestry_path(self, base):
        """Commits after base up to HEAD, oldest first"""
        cmd = ["log", "--format=%H", "--reverse", "--ancestry-path",
                "%s.." % base]
        status, output = self._execVcs(*cmd)
        return output.split()

    def format_patch_options(self):
        # keep the changing git version out of the patches when possible
        if self._format_patch_opts is None:
            status, output = self._execVcs("format-patch", "-h",
                    noerror=True)
            if "signature" in output:
                self._format_patch_opts = ["--no-signature"]
            else:
                self._format_patch_opts = []
        return self._format_patch_opts

    def format_patch(self, since):
        """Write one patch per commit after since, returns their names"""
        cmd = ["format-patch", "--no-renames"]
        cmd.extend(self.format_patch_options())
        cmd.extend(["-N", since])
        status, output = self._execVcs(*cmd)
        # anything else is a warning git printed on stderr
        return [name for name in output.splitlines()
                if os.path.isfile(os.path.join(self._path, name))]

# vim:et:ts=4:sw=4
