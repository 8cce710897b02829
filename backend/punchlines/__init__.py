"""
punchlines: an AI comedy writing partner
"""
__version__ = "0.1.0"
