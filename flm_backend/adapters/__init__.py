"""
Adapters for the external collaborators (storage backends, cache stores).
"""
