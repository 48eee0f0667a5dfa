"""
Run the pricing queue API on port 3006.
Usage: python3 run.py   (from backend directory)
"""
import uvicorn

from config import settings

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=3006,
        reload=settings.debug,
    )
