"""User interface layer for nodepanel."""
