"""
superenv - Named environment snapshots

Keep several versions of your .env file in a hidden .superenv directory
and push your working .env into them safely.
"""

__version__ = "0.1.0"
