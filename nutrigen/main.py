import socket

import uvicorn

from nutrigen.api.api_run import app
from nutrigen.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL


def get_local_ip() -> str:
    """Return the LAN address the OS would use for outbound traffic, or loopback.

    Connecting a UDP socket sends nothing; it only makes the OS pick a source address.
    """
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(("8.8.8.8", 80))
        ip = str(s.getsockname()[0])
    except OSError:
        ip = "127.0.0.1"
    finally:
        s.close()
    return ip


def run():
    local_url = f"http://localhost:{APP_PORT}"
    lan_url = f"http://{get_local_ip()}:{APP_PORT}"
    print(f"NutriGen running on {local_url} (Press CTRL+C to quit)")
    print(f"Open from another device on your network: {lan_url}")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
