"""
Runs the API server locally.

Run `python run_server_local.py` in the terminal to launch the server and
host the swagger UI at `http://0.0.0.0:8001/docs`
"""
import uvicorn
import signal
import sys

def main():
    # Uvicorn used programmatically for proper cleanup on Ctrl+C
    config = uvicorn.Config(
        "api.server:app",
        host="0.0.0.0",
        port=8001,
        reload=True
    )
    server = uvicorn.Server(config)

    def handle_exit(sig, frame):
        print("\nShutting down the resume analyzer API...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_exit)
    signal.signal(signal.SIGTERM, handle_exit)

    server.run()
    print("Server stopped cleanly.")

if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nKeyboard interrupt received. Exiting...")
        sys.exit(0)
