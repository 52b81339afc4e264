from UpdatePatches import Error
from UpdatePatches.command import *
from UpdatePatches.rpmutil import update

HELP = """\
Usage: update-patches [OPTIONS]

Formats the patches from the <branch>-patches branch, adds them to the
current branch and updates the Patch/%patch lines of the spec file.

The patches start after the commit named by the "# patches_base=REF[+SKIP]"
line of the spec file, SKIP commits being skipped. The result is a single
commit on the current branch.

Options:
    -v      Show the commands being run
    -h      Show this message

Examples:
    git checkout master
    git branch master-patches redhat-openstack/master-patches
    update-patches

When the package is built, don't forget to push the patches branch too:
    git push --tags redhat-openstack +master-patches
"""

def parse_options():
    parser = OptionParser(help=HELP)
    parser.add_option("-v", dest="verbose", default=False,
            action="store_true")
    opts, args = parser.parse_args()
    if args:
        raise Error("invalid arguments: %s" % " ".join(args))
    return opts

def main():
    do_command(parse_options, update)

# vim:et:ts=4:sw=4
