"""
SeedFarm Tomato API
===================

Python package for the tomato smart-farm API.

HOW IT'S ORGANIZED:
------------------
- client/    = Async functions, one per n8n webhook (use these from code)
- models/    = Request bodies we send or accept
- services/  = Workers (forward requests to n8n, load the API description)
- routers/   = Local server endpoints (Swagger docs + proxy routes)
- main.py    = Puts the server together and starts it

Author: SeedFarm Team
"""

__version__ = "2.1.0"
