"""
Main Entry Point for Brainrot Comments
======================================
Runs the command-line host without installing the package:

    python main.py add-comment app.py --cursor 12:1
"""

from brainrot.cli import cli

if __name__ == '__main__':
    cli()
