"""Entry point for the Las Vegas N-Queens experiments.

Runs the demonstration sequence by default; see ``python algo.py --help``.
"""
from lvqueens.analysis.cli import main


if __name__ == "__main__":
    main()
