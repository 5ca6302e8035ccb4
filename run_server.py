"""Flask server that stays alive"""

import os
import sys

if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")

from app import create_app


def main() -> None:
    app = create_app()

    # Get host/port from environment or use default
    host = os.environ.get("FLASK_RUN_HOST", "0.0.0.0")
    port = int(os.environ.get("FLASK_RUN_PORT", 8000))

    print(f"Server starting on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")

    try:
        # No reloader: it would fork a second process with its own pollers
        app.run(host=host, port=port, debug=False, use_reloader=False, threaded=True)
    except KeyboardInterrupt:
        print("\nServer stopped by user")
    finally:
        app.extensions["plantcare_shutdown"]("server-exit")


if __name__ == "__main__":
    main()
