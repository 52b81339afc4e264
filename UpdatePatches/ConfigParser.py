"""
Configuration for update-patches.

The files are read in order, so that options found in later files override
the ones found in earlier files:

    /etc/update-patches.conf
    $UPDATE_PATCHES_CONF
    ~/.update-patches/config
"""
import configparser
import os

__all__ = ["Config", "DEFAULT_CONFFILES"]

DEFAULT_CONFFILES = ["/etc/update-patches.conf"]

BOOL_STATES = {'1': 1, 'yes': 1, 'true': 1, 'on': 1,
               '0': 0, 'no': 0, 'false': 0, 'off': 0}

class Config:
    def __init__(self, conffiles=None):
        # no interpolation: option values such as the commit message carry
        # their own %(name)s placeholders
        self._config = configparser.RawConfigParser()
        self._config.optionxform = str
        if conffiles is None:
            conffiles = list(DEFAULT_CONFFILES)
            conf = os.environ.get("UPDATE_PATCHES_CONF")
            if conf:
                conffiles.append(conf)
            conffiles.append(os.path.expanduser("~/.update-patches/config"))
        for file in conffiles:
            if os.path.isfile(file):
                self.read(file)

    def read(self, filename):
        try:
            self._config.read(filename)
        except configparser.Error as e:
            # imported late, UpdatePatches imports this module first
            from UpdatePatches import Error
            raise Error("invalid configuration file %s: %s" % (filename, e))

    def set(self, section, option, value):
        if not self._config.has_section(section):
            self._config.add_section(section)
        self._config.set(section, option, value)

    def get(self, section, option, default=None):
        try:
            return self._config.get(section, option)
        except configparser.Error:
            return default

    def getbool(self, section, option, default=None):
        ret = self.get(section, option)
        if isinstance(ret, str) and ret.lower() in BOOL_STATES:
            return BOOL_STATES[ret.lower()]
        return default

    def getlist(self, section, option, default=None):
        """Whitespace separated option value as a list"""
        ret = self.get(section, option)
        if ret is None:
            return default
        return ret.split()

# vim:ts=4:sw=4:et
