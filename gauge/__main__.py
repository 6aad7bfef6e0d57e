"""
Gauge Module Entry Point
=========================

Allows running the Gauge CLI via: python -m gauge
"""

from gauge.cli import main

if __name__ == "__main__":
    main()
