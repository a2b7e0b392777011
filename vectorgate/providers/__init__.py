"""Concrete backend adapters: embedding providers, vector stores, session store."""
