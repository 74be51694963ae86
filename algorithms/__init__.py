"""
Algorithms package for the Deadlock Detection Analyzer.
Contains the Work/Finish deadlock detection implementation.
"""
