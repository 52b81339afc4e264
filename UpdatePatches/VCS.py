from UpdatePatches import Error
from UpdatePatches.util import execcmd
import os

__all__ = ["VCS"]

class VCS(object):
    """Version control operations needed to update a package's patches.

    Subclasses set vcs_command and implement the operations the update
    relies on; tests substitute in-memory implementations.
    """
    vcs_name = None
    def __init__(self, path=None):
        self.vcs_command = None
        if not path:
            path = os.path.curdir
        self._path = path

    @property
    def path(self):
        return self._path

    def _execVcs(self, *args, **kwargs):
        if not self.vcs_command:
            raise Error("no command configured for %s" % self.vcs_name)
        cmd = list(self.vcs_command) + list(args)
        kwargs.setdefault("cwd", self._path)
        return execcmd(*cmd, **kwargs)

    def _add_log(self, cmd_args, received_kwargs):
        ret = received_kwargs.get("log")
        if ret is not None:
            cmd_args.extend(("-m", ret))

    def add(self, *paths, **kwargs):
        cmd = ["add", "--"] + list(paths)
        return self._execVcs(*cmd, **kwargs)

    def remove(self, *paths, **kwargs):
        cmd = ["rm", "--"] + list(paths)
        return self._execVcs(*cmd, **kwargs)

    def is_clean(self):
        raise NotImplementedError

    def current_branch(self):
        raise NotImplementedError

    def commit(self, *paths, **kwargs):
        raise NotImplementedError

    def checkout(self, branch):
        raise NotImplementedError

    def ancestry_path(self, base):
        raise NotImplementedError

    def format_patch(self, since):
        raise NotImplementedError

# vim:et:ts=4:sw=4
