import sys

from pr_changelog.cli import cli

sys.exit(cli())
