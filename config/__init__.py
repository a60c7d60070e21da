"""
Project configuration: data paths and report settings
"""
