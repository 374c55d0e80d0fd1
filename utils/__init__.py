"""
String and markup helpers used by the duplicate pipeline.
"""
