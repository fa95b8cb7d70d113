# --- Log and Debug ---
# Short aliases for module names to keep CLI flags concise
LOG_ALIAS_MAP = {
    "args": "cport.builder.args",
    "arg": "cport.builder.args",
    "loc": "cport.builder.locator",
    "locator": "cport.builder.locator",
    "session": "cport.builder.session",
    "ses": "cport.builder.session",
    "relay": "cport.builder.relay",
    "build": "cport.builder.build",
    "bld": "cport.builder.build",
    "docker": "cport.runtime.docker_runtime",
    "rt": "cport.runtime",
    "conf": "cport.config",
    "cli": "cport.cli",
}

# Top-level modules within cport for auto-prefixing
KNOWN_TOP_MODULES = {
    "builder",
    "runtime",
    "datacls",
    "utils",
    "config",
    "cli",
}

# --- Configuration ---
DEFAULT_CONFIG_FILE = "cport.toml"
DEFAULT_GENERATOR = "Ninja"
DEFAULT_BUILD_DIR = "_cport"
CMAKE_LISTS = "CMakeLists.txt"

# --- Container labels ---
# The identity triple of a build container
LABEL_IMAGE = "cport.image"
LABEL_SOURCE = "cport.source"
LABEL_BUILD = "cport.build"

# --- Native tools ---
CMAKE = "cmake"
APT_UPDATE = ["apt", "update"]
APT_INSTALL = ["apt", "install", "-y"]
