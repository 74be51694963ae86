"""
Analysis package for the Deadlock Detection Analyzer.
Contains trace events and report rendering.
"""
