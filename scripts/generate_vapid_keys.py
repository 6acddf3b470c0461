# scripts/generate_vapid_keys.py
# Gera um novo par de chaves VAPID para VAPID_PUBLIC_KEY / VAPID_PRIVATE_KEY (.env)
from cryptography.hazmat.primitives import serialization
from py_vapid import Vapid
from py_vapid.utils import b64urlencode


def generate_vapid_keys() -> tuple[str, str]:
    v = Vapid()
    v.generate_keys()
    public_raw = v.public_key.public_bytes(
        serialization.Encoding.X962, serialization.PublicFormat.UncompressedPoint
    )
    private_raw = v.private_key.private_numbers().private_value.to_bytes(32, "big")
    return b64urlencode(public_raw), b64urlencode(private_raw)


if __name__ == "__main__":
    public_key, private_key = generate_vapid_keys()
    print("VAPID Public Key:", public_key)
    print("VAPID Private Key:", private_key)
