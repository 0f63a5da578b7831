"""
Main Entry Module

Runs the admin API under the uvicorn development server.

Usage:
    python -m careadmin.main

Author: Care Admin Development Team
"""

import os

from careadmin.app import app

__all__ = ["app"]

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "careadmin.app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "false").lower() == "true",
        log_level="info",
    )
