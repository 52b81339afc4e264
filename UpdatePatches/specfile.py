"""
The small part of an RPM spec file update-patches cares about.

A spec file handled here looks like:

    Source0: %{name}-%{version}.tar.gz

    #
    # patches_base=1.2.0+1
    #
    Patch0001: 0001-Fix-the-frobnicator.patch
    Patch0002: 0002-Drop-the-bundled-library.patch
    ...
    %prep
    %setup -q -n %{name}-%{version}
    %patch0001 -p1
    %patch0002 -p1

Everything that is not a Patch/%patch directive is kept untouched.
"""
from UpdatePatches import Error
import tempfile
import shutil
import re
import os

__all__ = ["SpecFile", "DirectiveLine", "parse_patches_base"]

PATCHES_BASE_PREFIX = "# patches_base"
SETUP_PREFIX = "%setup -q"

DIRECTIVE_RE = re.compile(r"^(?P<commented>#?)(?P<kind>Patch|%patch)"
                          r"(?P<number>[0-9]+)(?P<rest>.*)$")

# the bytes of the file are kept as they are, whatever their encoding
ENCODING = dict(encoding="utf-8", errors="surrogateescape", newline="")

def split_eol(line):
    """Split line in its text and its line ending"""
    if line.endswith("\r\n"):
        return line[:-2], "\r\n"
    if line.endswith("\n"):
        return line[:-1], "\n"
    return line, ""

def splitlines(text):
    """Lines of text with their endings, split on \\n only"""
    lines = [line + "\n" for line in text.split("\n")]
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines

def parse_patches_base(value):
    """Split a patches_base value in its ref and skip count.

    >>> parse_patches_base("1.2.0+3")
    ('1.2.0', 3)
    >>> parse_patches_base("1.2.0")
    ('1.2.0', 0)
    """
    ref, sep, skip = value.rpartition("+")
    if not sep:
        return value, 0
    if not ref:
        raise Error("invalid patches_base, no ref before '+': %s" % value)
    if not skip.isdigit():
        raise Error("invalid skip count in patches_base: %s" % value)
    return ref, int(skip)

class DirectiveLine(object):
    """A PatchNNNN: declaration or a %patchNNNN apply line"""
    DECLARATION = "Patch"
    APPLY = "%patch"

    def __init__(self, kind, number, rest, commented=False, eol="\n"):
        self.kind = kind
        self.number = number
        self.rest = rest
        self.commented = commented
        self.eol = eol

    @classmethod
    def parse(cls, line):
        text, eol = split_eol(line)
        m = DIRECTIVE_RE.match(text)
        if not m:
            return None
        return cls(m.group("kind"), m.group("number"), m.group("rest"),
                bool(m.group("commented")), eol)

    @classmethod
    def declaration(cls, index, filename, eol="\n"):
        return cls(cls.DECLARATION, "%04d" % index, ": %s" % filename,
                eol=eol)

    @classmethod
    def apply(cls, index, eol="\n"):
        return cls(cls.APPLY, "%04d" % index, " -p1", eol=eol)

    def is_declaration(self):
        return self.kind == self.DECLARATION

    @property
    def filename(self):
        if not self.is_declaration() or not self.rest.startswith(":"):
            return None
        fields = self.rest[1:].split()
        if not fields:
            return None
        return fields[0]

    def __str__(self):
        return "%s%s%s%s%s" % ("#" if self.commented else "", self.kind,
                self.number, self.rest, self.eol)

    def __repr__(self):
        return "<DirectiveLine %r>" % split_eol(str(self))[0]

    def __eq__(self, other):
        return isinstance(other, DirectiveLine) and str(self) == str(other)

class SpecFile(object):
    def __init__(self, path=None, text=None):
        self.path = path
        if text is None:
            if path is None:
                raise Error("SpecFile needs a path or its text")
            try:
                with open(path, **ENCODING) as f:
                    text = f.read()
            except OSError as e:
                raise Error("could not read spec file %s: %s" % (path, e))
        self.lines = []
        # line ending of the lines written here, the first one found
        self.eol = "\n"
        for line in splitlines(text):
            directive = DirectiveLine.parse(line)
            self.lines.append(directive if directive else line)
        for line in self.lines:
            eol = split_eol(str(line))[1]
            if eol:
                self.eol = eol
                break

    def __str__(self):
        return "".join(str(line) for line in self.lines)

    def _index(self, prefix):
        for i, line in enumerate(self.lines):
            if isinstance(line, str) and line.startswith(prefix):
                return i
        return None

    def directives(self):
        return [line for line in self.lines
                if isinstance(line, DirectiveLine)]

    def patches_base(self):
        """Raw value of the first # patches_base= line, or None"""
        i = self._index(PATCHES_BASE_PREFIX)
        if i is None:
            return None
        fields = split_eol(self.lines[i])[0].split("=")
        if len(fields) < 2 or not fields[1].strip():
            return None
        return fields[1].strip()

    def patches(self):
        """Files named by the declaration lines, commented or not"""
        return [d.filename for d in self.directives()
                if d.is_declaration() and d.filename]

    def remove_patches(self):
        self.lines = [line for line in self.lines
                      if not isinstance(line, DirectiveLine)]

    def _insert_after(self, index, lines):
        anchor = self.lines[index]
        if not split_eol(anchor)[1]:
            self.lines[index] = anchor + self.eol
        self.lines[index+1:index+1] = lines

    def add_patches(self, names):
        if not names:
            return
        declarations = [DirectiveLine.declaration(i, name, self.eol)
                        for i, name in enumerate(names, 1)]
        applies = [DirectiveLine.apply(i, self.eol)
                   for i in range(1, len(names) + 1)]
        baseindex = self._index(PATCHES_BASE_PREFIX)
        if baseindex is None:
            raise Error("no patches_base line found in %s" % self.path)
        setupindex = self._index(SETUP_PREFIX)
        if setupindex is None:
            raise Error("no '%s' line found in %s" % (SETUP_PREFIX,
                self.path))
        # insert the lowest block last so the other index stays valid
        for index, block in sorted([(baseindex, declarations),
                                    (setupindex, applies)],
                                   key=lambda item: item[0], reverse=True):
            self._insert_after(index, block)

    def set_patches(self, names):
        """Replace every Patch/%patch line with a block for names"""
        self.remove_patches()
        self.add_patches(names)

    def write(self, path=None):
        path = path or self.path
        dirname, basename = os.path.split(os.path.abspath(path))
        fd, tmppath = tempfile.mkstemp(prefix="." + basename + ".",
                dir=dirname)
        try:
            with os.fdopen(fd, "w", **ENCODING) as f:
                f.write(str(self))
            if os.path.exists(path):
                shutil.copymode(path, tmppath)
            os.replace(tmppath, path)
        finally:
            if os.path.exists(tmppath):
                os.unlink(tmppath)

# vim:et:ts=4:sw=4
