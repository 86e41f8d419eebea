"""
Run the detector service.

Usage:
    python -m currency_detector.scripts.serve
    CAMERA_ADAPTER=cv2 python -m currency_detector.scripts.serve   (server webcam)
"""
import os
import uvicorn

if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    print(f"Currency detector starting on http://{host}:{port}")
    uvicorn.run("currency_detector.services.api:app", host=host, port=port)
