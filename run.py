# run.py
import sys
import uvicorn
from docuvoice.config import settings

def main():
    try:
        uvicorn.run(
            "docuvoice.main:app",
            host="0.0.0.0",
            port=8000,
            reload=settings.is_development
        )
    except Exception as e:
        print(f"Error starting the server: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
