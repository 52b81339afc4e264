from UpdatePatches import Error, config
from UpdatePatches.git import GIT
from UpdatePatches.fedpkg import find_pkgtool
from UpdatePatches.filterdiff import FilterDiff
from UpdatePatches.specfile import SpecFile, parse_patches_base
import progressbar
import sys
import os

DEFAULT_COMMIT_MESSAGE = "Updated patches from %(branch)s"

class UpdateContext(object):
    """Everything a patches update works on.

    It is built once, after the preconditions have been checked, and then
    handed to every step so none of them looks at the process state by
    itself.
    """
    def __init__(self, vcs, pkgtool, patchfilter, branch, patches_branch,
            specpath):
        self.vcs = vcs
        self.pkgtool = pkgtool
        self.patchfilter = patchfilter
        self.branch = branch
        self.patches_branch = patches_branch
        self.specpath = specpath

    @property
    def message(self):
        template = config.get("global", "commit-message",
                DEFAULT_COMMIT_MESSAGE)
        return template % {"branch": self.patches_branch}

    def repopath(self, name):
        return os.path.join(self.vcs.path, name)

def check_preconditions(vcs, patchfilter):
    if not vcs.is_clean():
        raise Error("The repo is not clean. Aborting")
    patchfilter.check()

def prepare_update(path=os.path.curdir, vcs=None, pkgtool=None,
        patchfilter=None):
    """Check the working copy at path and build its UpdateContext"""
    if vcs is None:
        vcs = GIT(path)
    if patchfilter is None:
        patchfilter = FilterDiff()
    check_preconditions(vcs, patchfilter)
    if pkgtool is None:
        pkgtool = find_pkgtool(vcs.path)
    specpath = pkgtool.gimmespec()
    branch = vcs.current_branch()
    suffix = config.get("global", "patches-suffix", "-patches")
    return UpdateContext(vcs, pkgtool, patchfilter, branch, branch + suffix,
            specpath)

def resolve_start_commit(commits, skip):
    """Pick the commit the exported patches start after.

    commits is the ancestry path from patches_base to the branch tip,
    oldest first. The last skip entries are dropped and the last remaining
    one is returned, None when nothing remains.
    """
    if skip:
        commits = commits[:-skip]
    if not commits:
        return None
    return commits[-1]

def export_patches(context, base, skip):
    """Format and filter the patches, the patches branch must be current"""
    commits = context.vcs.ancestry_path(base)
    start = resolve_start_commit(commits, skip)
    if start is None:
        sys.stderr.write("warning: no patches found\n")
        return []
    patches = context.vcs.format_patch(start)
    if patches:
        # non dist files would make patch prompt or fail for files that
        # do not exist in the package tree
        bar = progressbar.ProgressBar(max_value=len(patches),
                redirect_stdout=True)
        for i, patch in enumerate(patches, 1):
            context.patchfilter.filter(context.repopath(patch))
            bar.update(i)
        bar.finish()
    return patches

def update_spec(specpath, patches):
    spec = SpecFile(specpath)
    spec.set_patches(patches)
    spec.write()
    return spec

def update_patches(context):
    """Regenerate the patches of the package from its patches branch"""
    vcs = context.vcs
    specpath = context.repopath(context.specpath)
    spec = SpecFile(specpath)
    value = spec.patches_base()
    if value is None:
        raise Error("no patches_base line found in %s" % context.specpath)
    base, skip = parse_patches_base(value)
    orig_patches = spec.patches()

    # first commit removes all the patches, it is amended at the end
    if orig_patches:
        vcs.remove(*orig_patches)
    vcs.commit(*orig_patches, log=context.message, allow_empty=True)

    vcs.checkout(context.patches_branch)
    patches = export_patches(context, base, skip)
    vcs.checkout(context.branch)

    update_spec(specpath, patches)
    if patches:
        vcs.add(*patches)
        print("Updated %s with %d patches from %s" % (context.specpath,
            len(patches), context.patches_branch))
    vcs.commit(log=context.message, amend=True, all=True)
    return patches

def update(verbose=False, path=os.path.curdir):
    if verbose:
        config.set("global", "verbose", "yes")
    context = prepare_update(path)
    return update_patches(context)

# vim:et:ts=4:sw=4
