"""
Run script to start the FastAPI server (no reload).
"""
import uvicorn
import os
import sys

# Add the project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.config import Settings


def main():
    """Start the Uvicorn server."""
    settings = Settings()
    
    print("🚀 Starting COVID Testing Analytics API...")
    print(f"📖 API Documentation: http://localhost:{settings.HTTP_PORT}/docs")
    print(f"📊 ReDoc: http://localhost:{settings.HTTP_PORT}/redoc")
    print("-" * 50)
    
    uvicorn.run(
        "app.main:app",
        host=settings.HTTP_HOST,
        port=settings.HTTP_PORT,
        reload=False,  # No reload for stability
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    main()
