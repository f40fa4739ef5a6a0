"""Allow `python -m aerospace_utils`."""

from .command import main

main()
