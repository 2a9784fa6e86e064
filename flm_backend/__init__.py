"""
FLM backend: storage adapters, configuration and the folder listing engine.
"""
