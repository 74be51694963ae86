"""
Utilities package for the Deadlock Detection Analyzer.
Contains input parsing, scenario loading and logging.
"""
