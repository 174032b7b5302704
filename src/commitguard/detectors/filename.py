import re
from typing import Optional

from .base import Detector
from ..core.findings import Finding
from ..git.addition import Addition

# File names that almost always hold credentials or private data.
FILENAME_PATTERNS = [
    (r"^.+_rsa$", "SSH private key"),
    (r"^.+_dsa.*$", "SSH private key"),
    (r"^.+_ed25519$", "SSH private key"),
    (r"^.+_ecdsa$", "SSH private key"),
    (r"^\.\w+_history$", "Shell history"),
    (r"^.+\.pem$", "PEM certificate or key"),
    (r"^.+\.ppk$", "PuTTY private key"),
    (r"^.+\.key(pair)?$", "Private key"),
    (r"^.+\.pkcs12$", "PKCS#12 keystore"),
    (r"^.+\.pfx$", "PKCS#12 keystore"),
    (r"^.+\.p12$", "PKCS#12 keystore"),
    (r"^.+\.asc$", "PGP armored key"),
    (r"^.+\.(jks|keystore|keyring)$", "Java/OS keystore"),
    (r"^.+\.kdbx?$", "KeePass database"),
    (r"^.+\.(agile)?keychain$", "Keychain"),
    (r"^.+\.ovpn$", "OpenVPN configuration"),
    (r"^.+\.tblk$", "Tunnelblick configuration"),
    (r"^\.?htpasswd$", "htpasswd file"),
    (r"^\.?netrc$", ".netrc credentials"),
    (r"^\.?s3cfg$", "s3cmd configuration"),
    (r"^\.?pgpass$", "PostgreSQL password file"),
    (r"^credentials(\.xml|\.json)?$", "Credentials file"),
    (r"^.+\.pubxml(\.user)?$", "Publish profile"),
    (r"^\.env(\..+)?$", "Environment file"),
    (r"^.+\.(sql|sqldump)$", "Database dump"),
    (r"^.*dump\.(sql|rdb)$", "Database dump"),
    (r"^secret_token\.rb$", "Rails secret token"),
]

_COMPILED = [(re.compile(p, re.IGNORECASE), kind) for p, kind in FILENAME_PATTERNS]


class FileNameDetector(Detector):
    """Flags files whose name marks them as secret material."""

    name = "filename"

    def test(self, addition: Addition, ignore_config) -> Optional[Finding]:
        for regex, kind in _COMPILED:
            if regex.match(addition.name):
                return self.finding(
                    addition,
                    f"The file name '{addition.name}' looks like a sensitive file ({kind})",
                )
        return None
