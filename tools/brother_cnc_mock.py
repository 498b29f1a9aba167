# brother_cnc_mock.py
"""Fake Brother controller answering LOD requests with canned files."""

import argparse
import math
import random
import socket
import sys
import time
from typing import Dict, Optional, Tuple

CANNED_FILES: Dict[str, str] = {
    "PRDC2": "C00,BROTHER,SPEEDIO",
    "MSRRSC": "C01,0",
    "MEM": "O2045.NC",
    "ALARM": "E01,052039,DOOR INTERLOCK,O2045,N120,error\r\nE02,0",
    "WKCNTR": "1,245,1000,0,normal\r\n2,12,50,0,normal\r\n3,0,0,0\r\n4,0,0,0",
    "TOLNM1": (
        "Y01,1,2\r\n"
        "T01,100.5000,0.0000,10.0000,0.0000,1,10000,9500,9952,'10 ENDMILL',"
        "0,0,0,0,0,0,0,0.0000,0.0000,0.0000,0.0000\r\n"
        "T02,85.2500,0.0000,6.0000,0.0000,1,5000,4500,4980,'6 DRILL',"
        "0,0,0,0,0,0,0,0.0000,0.0000,0.0000,0.0000"
    ),
    "POSNM1": (
        "G54,-250.000,-120.500,-300.250,0.000\r\n"
        "G55,0.000,0.000,0.000\r\n"
        "X01,10.000,20.000,30.000"
    ),
    "MONTR": "125,100,25,3600,86400",
    "ATCTL": "M01,1,1,0\r\nM02,1,1,0,3\r\nM03,2,1,0,5\r\nM04,255,1,0,0",
    "PANEL": "1,0,0,1",
    "MCRNM1": "C500,1.000,C501,,C502,-3.250",
}


def checksum(text: str) -> int:
    return sum(ord(char) for char in text) % 16


def frame(command: str, payload: str) -> str:
    body = f"%{command}\r\n{payload}\r\n"
    return f"{body}{checksum(payload):02d}%\r\n"


def parse_request(text: str) -> Tuple[str, str]:
    line = text.lstrip("%").split("\r\n", 1)[0]
    return line[1:8].strip(), line[8:16].strip()


def production_data(t: float) -> str:
    """PDSP payload with slowly changing spindle speed and axis positions."""

    spindle = int(8000 + 2000 * math.sin(0.2 * t))
    feed = int(1500 + random.randint(-20, 20))
    x = 150.0 * math.sin(0.3 * t)
    y = 80.0 * math.cos(0.3 * t)
    z = -50.0 + 5.0 * math.sin(0.7 * t)
    return "\r\n".join(
        [
            "L01,0,100,100,100",
            f"L02,{spindle},{random.randint(10, 40)},{feed}",
            f"L03,{x:.3f},{y:.3f},{z:.3f}",
            f"L04,{x + 250:.3f},{y + 120.5:.3f},{z + 300.25:.3f}",
        ]
    )


def read_request(conn: socket.socket) -> Optional[str]:
    data = b""
    while data.count(b"%") < 2:
        chunk = conn.recv(1024)
        if not chunk:
            return None
        data += chunk
    return data.decode("ascii", errors="replace")


def main():
    ap = argparse.ArgumentParser(description="Dummy Brother CNC controller (LOD file server)")
    ap.add_argument("--host", default="127.0.0.1", help="listen host")
    ap.add_argument("--port", type=int, default=10000, help="listen port")
    ap.add_argument("--drop-rate", type=float, default=0.0, help="probability of closing without reply (0.0-1.0)")
    args = ap.parse_args()

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((args.host, args.port))
    except OSError as e:
        print(f"[ERROR] bind failed on {args.host}:{args.port}: {e}", file=sys.stderr)
        sys.exit(2)
    sock.listen(5)
    print(f"[INFO] serving canned controller files on tcp://{args.host}:{args.port}")

    t0 = time.perf_counter()
    try:
        while True:
            conn, addr = sock.accept()
            with conn:
                request = read_request(conn)
                if request is None:
                    continue
                command, argument = parse_request(request)
                if args.drop_rate > 0 and random.random() < args.drop_rate:
                    print(f"[WARN] dropping {command} {argument} from {addr}")
                    continue
                if command == "LOD" and argument == "PDSP":
                    payload = production_data(time.perf_counter() - t0)
                else:
                    payload = CANNED_FILES.get(argument, "NOT FOUND")
                print(f"[INFO] {command} {argument} -> {len(payload)} bytes")
                conn.sendall(frame(command, payload).encode("ascii"))
    except KeyboardInterrupt:
        print("\n[INFO] stopped by user (Ctrl+C).")
    finally:
        sock.close()


if __name__ == "__main__":
    main()
