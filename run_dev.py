"""
Local development launcher for FastAPI.
Equivalent to: `uvicorn concierge.app:app --reload --host 0.0.0.0 --port 3000`
"""

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "concierge.app:app",
        host="0.0.0.0",
        port=3000,
        reload=True,
    )
