import sys

from rich.pretty import pprint

from scrivener import *


if __name__ == '__main__':
    result = match(" ".join(sys.argv[1:]) or "cursor c1 notes 3 -> 9")
    pprint(result if isinstance(result, Matched) else diagnose(result.line))
