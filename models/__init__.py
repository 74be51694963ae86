"""
Models package for the Deadlock Detection Analyzer.
Contains the Snapshot input and AnalysisResult output types.
"""
