"""
Congregation admin API: persistence layer and HTTP routes for the church
admin console.
"""

__version__ = "1.0.0"
