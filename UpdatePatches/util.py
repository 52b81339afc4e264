from UpdatePatches import CommandError, config

import subprocess
import shlex
import sys
import os

# commands are run with the C locale so that their output can be parsed
LOCALE_ENV = {"LANG": "C", "LANGUAGE": "C", "LC_ALL": "C"}

def cmdline(cmd):
    return " ".join(shlex.quote(str(arg)) for arg in cmd)

def execcmd(*cmd, **kwargs):
    """Run cmd and return (status, output).

    Keyword arguments:
        cwd      directory the command is run from
        show     let the command write directly to the terminal
        outfile  file object receiving the standard output, in which case
                 the returned output is whatever went to standard error
        noerror  return a non-zero status instead of raising CommandError
    """
    if len(cmd) == 1 and isinstance(cmd[0], (list, tuple)):
        cmd = cmd[0]
    cmd = [str(arg) for arg in cmd]
    cmdstr = cmdline(cmd)
    verbose = config.getbool("global", "verbose", 0)
    env = dict(os.environ)
    env.update(LOCALE_ENV)
    if verbose:
        print(cmdstr)
    popenargs = dict(cwd=kwargs.get("cwd"), env=env,
            encoding="utf-8", errors="replace")
    outfile = kwargs.get("outfile")
    try:
        if kwargs.get("show"):
            proc = subprocess.run(cmd, **popenargs)
            output = ""
        elif outfile is not None:
            proc = subprocess.run(cmd, stdout=outfile,
                    stderr=subprocess.PIPE, **popenargs)
            output = proc.stderr
        else:
            proc = subprocess.run(cmd, stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT, **popenargs)
            output = proc.stdout
    except OSError as e:
        if kwargs.get("noerror"):
            return 127, str(e)
        raise CommandError("command failed: %s\n%s\n" % (cmdstr, e), 127)
    status = proc.returncode
    if status < 0:
        # killed by a signal, report it the way a shell does
        status = 128 - status
    if output[-1:] == "\n":
        output = output[:-1]
    if status != 0 and not kwargs.get("noerror"):
        raise CommandError("command failed: %s\n%s\n" % (cmdstr, output),
                status)
    if verbose and output:
        sys.stdout.write(output + "\n")
    return status, output

# vim:et:ts=4:sw=4
