from typing import Final

# Settings file, looked up in the current working directory
SETTINGS_FILE: Final = ".renpy-helper-settings.json"

# Default rembg invocation
DEFAULT_REMBG_FLAGS: Final = ("-a", "-m", "isnet-general-use")
DEFAULT_INPUT_DIRECTORY: Final = "."
DEFAULT_OUTPUT_DIRECTORY: Final = "./output"

# Suffix appended to the stem of processed images
CLEAN_SUFFIX: Final = "_clean"

# Common image file extensions accepted by the file picker
IMAGE_EXTENSIONS: Final = frozenset({".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff", ".webp"})

# Environment override for the rembg executable
REMBG_EXECUTABLE_ENV: Final = "RENPY_HELPER_REMBG"
DEFAULT_REMBG_EXECUTABLE: Final = "rembg"
