"""Server entry point for the Voice Commands API."""

import os

import uvicorn


def main():
    """Run the FastAPI server (VOICECOMMANDS_HOST / VOICECOMMANDS_PORT to override)."""
    uvicorn.run(
        "voicecommands.api:app",
        host=os.environ.get("VOICECOMMANDS_HOST", "127.0.0.1"),
        port=int(os.environ.get("VOICECOMMANDS_PORT", "8080")),
        log_level="info",
    )


if __name__ == "__main__":
    main()
