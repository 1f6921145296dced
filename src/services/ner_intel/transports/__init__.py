"""
NER Intel Transports

Transport implementations for exposing the entrypoints.
"""
