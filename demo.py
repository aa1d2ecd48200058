#!/usr/bin/env python3
"""Demo script showing Growl notifications over GNTP and UDP."""

import socket
import threading
import time

from growl import BinaryClient, BinaryTransport, NotificationSession, TextClient, TextTransport
from growl.constants import FRAME_TERMINATOR

GNTP_DEMO_PORT = 23054
UDP_DEMO_PORT = 9888


def demo_gntp_server():
    """Run a toy GNTP daemon that accepts everything and clicks every notification."""
    print(f"Starting GNTP server on 127.0.0.1:{GNTP_DEMO_PORT}...")

    srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    srv.bind(("127.0.0.1", GNTP_DEMO_PORT))
    srv.listen()

    while True:
        conn, _ = srv.accept()
        with conn:
            request = bytearray()
            while FRAME_TERMINATOR not in request:
                chunk = conn.recv(4096)
                if not chunk:
                    break
                request.extend(chunk)

            info = bytes(request).split(b"\r\n", 1)[0].decode()
            print(f"Server received: {info}")

            action = info.split(" ")[1]
            conn.sendall(f"GNTP/1.0 -OK NONE\r\nResponse-Action: {action}\r\n\r\n\r\n".encode())
            if b"Notification-Callback-Context:" in request:
                conn.sendall(
                    b"GNTP/1.0 -CALLBACK NONE\r\n"
                    b"Notification-Callback-Result: CLICKED\r\n"
                    b"Notification-Callback-Timestamp: 2025-01-01T12:00:00Z\r\n"
                    b"\r\n\r\n"
                )


def demo_udp_server():
    """Receive legacy UDP packets and print their size."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", UDP_DEMO_PORT))
    while True:
        data, _ = sock.recvfrom(65535)
        print(f"UDP server received: type {data[1]} packet, {len(data)} bytes")


def demo_client():
    """Register and send notifications with both protocols."""
    print("Starting Growl clients...")
    time.sleep(0.5)  # Wait for servers to start

    session = NotificationSession.create("Growl Demo", ["Build Finished", "Build Failed"], password="secret")
    session.add_notification("Deploy", "Deployment", icon="http://example.com/deploy.png")

    client = TextClient("127.0.0.1", session, transport=TextTransport("127.0.0.1", GNTP_DEMO_PORT))

    print("Registering over GNTP...")
    response = client.register()
    print(f"Received: {response.status.value} {response['Response-Action']}")

    print("Sending notification...")
    response = client.notify("Build Finished", "Build #42", "All tests passed", priority=1)
    print(f"Received: {response.status.value} {response['Response-Action']}")

    print("Sending notification with callback...")
    client.notify(
        "Deploy",
        "Deploy ready",
        "Click to deploy",
        on_callback=lambda cb: print(f"Callback: {cb['Notification-Callback-Result']} at {cb['Notification-Callback-Timestamp']}"),
    )

    print("Sending over UDP...")
    with BinaryClient("127.0.0.1", session, transport=BinaryTransport("127.0.0.1", UDP_DEMO_PORT)) as udp:
        udp.register()
        udp.notify("Build Failed", "Build #43", "2 tests failed", priority=2, sticky=True)

    time.sleep(0.2)
    print("Client finished.")


def main():
    """Run the demo."""
    print("Growl Demo - GNTP and UDP notifications")
    print("=" * 40)

    # Start servers in background threads
    threading.Thread(target=demo_gntp_server, daemon=True).start()
    threading.Thread(target=demo_udp_server, daemon=True).start()

    # Run clients
    demo_client()

    print("\nDemo completed!")


if __name__ == "__main__":
    main()
