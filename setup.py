#!/usr/bin/python3
from setuptools import setup
import sys
import re

verpat = re.compile("VERSION *= *\"(.*)\"")
data = open("update-patches").read()
m = verpat.search(data)
if not m:
    sys.exit("error: can't find VERSION")
VERSION = m.group(1)

setup(name="update-patches",
      version = VERSION,
      description = "Update the patches of a package spec file from a git branch",
      license = "GPL",
      long_description = """Formats the patches of a <branch>-patches git branch, adds them to
the packaging branch and regenerates the Patch/%patch lines of the spec file.""",
      packages = ["UpdatePatches", "UpdatePatches.commands"],
      scripts = ["update-patches"],
      data_files = [
          ("etc", ["update-patches.conf"])],
      install_requires=['progressbar2'],
      extras_require={'test': ['pytest']},
      )

# vim:ts=4:sw=4:et
