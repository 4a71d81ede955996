from typing import Tuple

# Case-insensitive extra-data substrings -> builder tag, checked in order
BUILDER_EXTRA_DATA_TAGS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("flashbots",), "Flashbots"),
    (("bloxroute", "blxr"), "bloXroute"),
    (("builder0x69",), "builder0x69"),
    (("titan",), "Titan"),
    (("rsync",), "rsync"),
    (("beaver",), "Beaver"),
    (("buildai",), "BuildAI"),
    (("penguinbuild",), "Penguin"),
    (("ethbuilder",), "EthBuilder"),
    (("blocknative",), "Blocknative"),
)

# Fee recipients of known block builders (lowercase)
KNOWN_BUILDER_ADDRESSES: Tuple[Tuple[str, str], ...] = (
    ("0x95222290dd7278aa3ddd389cc1e1d165cc4bafe5", "Flashbots"),
    ("0x690b9a9e9aa1c9db991c7721a92d351db4fac990", "builder0x69"),
    ("0x1f9090aae28b8a3dceadf281b0f12828e676c326", "rsync"),
    ("0xdafea492d9c6733ae3d56b7ed1adb60692c98bc5", "Beacon Depositor"),
)

# Extra data shorter than this is shown as the builder name when it is plain text
MAX_PLAIN_BUILDER_TAG_LENGTH = 32
