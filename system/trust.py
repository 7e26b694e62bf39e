# system/trust.py
from __future__ import annotations
import os
from pathlib import Path
from typing import BinaryIO, List, Optional

from logger import log

LOCAL_TRUST_PREFIX = "mender-demo-"
LOCAL_TRUST_FORMAT = LOCAL_TRUST_PREFIX + "%d.crt"


def install_demo_certificate(cert_path: Path, trust_dir: Path) -> List[Path]:
    """Split the demo certificate bundle into one file per certificate.

    Files are created exclusively, read-only, as mender-demo-<n>.crt in
    trust_dir. Raises OSError on any failure.
    """
    trust_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    cert_num = 1
    out: Optional[BinaryIO] = None
    try:
        with open(cert_path, "rb") as src:
            for line in src:
                if out is None:
                    target = trust_dir / (LOCAL_TRUST_FORMAT % cert_num)
                    fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o444)
                    out = os.fdopen(fd, "wb")
                    written.append(target)
                out.write(line)
                if b"END CERTIFICATE" in line:
                    out.close()
                    out = None
                    cert_num += 1
    finally:
        if out is not None:
            out.close()
    log.info("Installed %d demo certificate(s) in %s", len(written), trust_dir)
    return written
