# Line key constants
WELCOME = "WELCOME"                      # plays once the detector is ready
INSTRUCTIONS = "INSTRUCTIONS"
DETECTING = "DETECTING"                  # plays when a detection starts
DETECTION_FAILED = "DETECTION_FAILED"    # vote produced no note
CAMERA_NEEDED = "CAMERA_NEEDED"
CAMERA_UNAVAILABLE = "CAMERA_UNAVAILABLE"
LOADING = "LOADING"

# Text content: spoken through the system speech tool when the audio file is missing
LINE_TEXT: dict[str, str] = {
    WELCOME: "Welcome to Currency Detector. Position an Indian currency note within the frame and hold steady for detection.",
    INSTRUCTIONS: "Double tap anywhere to detect the currency note. Swipe right for instructions. Swipe left to adjust settings.",
    DETECTING: "Analyzing currency note...",
    DETECTION_FAILED: "Could not detect any currency. Please try again.",
    CAMERA_NEEDED: "Camera access is required to detect currency notes.",
    CAMERA_UNAVAILABLE: "Camera is not available on this device.",
    LOADING: "Loading currency detection model...",
}

# Audio file for each line key (placed under assets/<filename>)
LINE_WAV: dict[str, str] = {key: f"{key.lower()}.mp3" for key in LINE_TEXT}

# Reverse lookup so fixed messages can use pre-recorded audio
TEXT_TO_KEY: dict[str, str] = {text: key for key, text in LINE_TEXT.items()}
