"""
Run the FastAPI backend server.
"""

import uvicorn
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from wrestling_meet.core.config import API_HOST, API_PORT


if __name__ == "__main__":
    print("=" * 60)
    print("Wrestling Meet Manager API Server")
    print("=" * 60)
    print(f"Starting server on http://{API_HOST}:{API_PORT}")
    print(f"API Documentation: http://localhost:{API_PORT}/docs")
    print("=" * 60)

    uvicorn.run(
        "wrestling_meet.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=True,
        log_level="info"
    )
