import sys


class Reporter:
    """Writes summary lines, list-only findings and error lines.

    Findings go to their own stream (stderr unless told otherwise) so that
    list-only output never mixes with declaration lines.
    """

    def __init__(self, out=None, findings=None, err=None):
        self.out = out if out is not None else sys.stdout
        self.findings = findings if findings is not None else sys.stderr
        self.err = err if err is not None else sys.stderr

    def lines(self, source, summaries, show_header=False):
        prefix = source + ":" if show_header else ""
        for s in summaries:
            self.out.write(prefix + s + "\n")

    def finding(self, source):
        self.findings.write(source + "\n")

    def error(self, exc):
        self.err.write(str(exc) + "\n")
