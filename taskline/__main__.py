"""``python -m taskline`` runs the command line."""
from taskline.cli.main import main

main()
