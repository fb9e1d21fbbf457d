"""
CLI entry point for the landmark-radar command.

This provides a user-friendly command-line interface for the radar engine.
"""
from landmark_radar.runner import main

# Re-export main for the console_scripts entry point
__all__ = ['main']

if __name__ == '__main__':
    main()
