import uvicorn

from my_todo.config import settings

# Determine environment: "prod" or "local"
ENV = settings.ENV.lower()

# Default settings
HOST = "localhost"
PORT = settings.PORT
RELOAD = True  # Enable live reload in local development

# Production config
if ENV == "prod":
    HOST = "0.0.0.0"
    RELOAD = False  # Disable reload in production
else:
    print("[Info] Running in local mode with live reload.")

# Start the FastAPI app
if __name__ == "__main__":
    uvicorn.run("my_todo.main:create_app", factory=True, host=HOST, port=PORT, reload=RELOAD)
