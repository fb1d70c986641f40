from argparse import ArgumentParser

from ApiBlame.config import BLAME_MODE, VERBOSE

argparser = ArgumentParser(description="Attribute calls on required JavaScript modules to git authors")

argparser.add_argument("-r", "--repository", type=str, default=".", help="Working directory of the git repository")
argparser.add_argument("-f", "--file", type=str, default=None, help="Source file to analyze, relative to the repository")
argparser.add_argument("-c", "--command", type=str, default="analyze_file", help="Command to run: analyze_file or analyze_repository")
argparser.add_argument("-b", "--blame", type=str, default=BLAME_MODE, choices=["batched", "per_line"], help="Blame lookup strategy")
argparser.add_argument("-w", "--workers", type=int, default=1, help="Files analyzed in parallel in repository mode")
argparser.add_argument("-o", "--output", type=str, default="./output", help="Directory for the repository report")
argparser.add_argument("-x", "--extensions", type=str, nargs="+", default=None, help="Source file extensions to analyze")
argparser.add_argument("--fail_fast", action="store_true", help="Abort the repository analysis on the first failing file")
argparser.add_argument("-v", "--verbose", action="store_true", default=VERBOSE, help="Debug logging")
