PICTURE_TITLE = "picture-title"
TITLE_DESCRIPTION = "title-description"
SEQUENTIAL = "sequential"
TEXT = "text"

MATCHING_KINDS = [TEXT, PICTURE_TITLE, TITLE_DESCRIPTION, SEQUENTIAL]

# Order in which the phases of a sequential activity are played
SEQUENTIAL_PHASES = [PICTURE_TITLE, TITLE_DESCRIPTION]

KIND_INSTRUCTIONS = {
    PICTURE_TITLE: "Match the pictures with their titles",
    TITLE_DESCRIPTION: "Match each title with its corresponding description",
    SEQUENTIAL: "Match the pictures with their titles, then each title with its description",
    TEXT: "Drag and drop items to create matching pairs",
}

PROMPT_FIELDS = ["prompt1", "prompt2", "prompt3", "prompt4", "prompt5", "prompt6"]
MAX_PROMPTS = len(PROMPT_FIELDS)

# Literal "left <sep> right" prompts; checked in this order
PAIR_SEPARATORS = ["=>", "->", "|"]

IMAGE_EXTENSIONS = ["jpg", "jpeg", "png", "gif", "bmp", "svg", "webp", "tiff", "ico"]

# Hosts that serve images without a file extension in the URL
IMAGE_MARKERS = [
    "gstatic.com",
    "googleusercontent.com",
    "imgur.com",
    "wikimedia.org",
    "scene7.com",
    "ytimg.com",
    "afdc.energy.gov",
    "pubaffairsbruxelles.eu",
    "images?q=",
]

MATCH_STATES = [
    "unanswered",
    "partially_matched",
    "fully_matched",
    "submitted",
    "reviewed",
]

EQUIVALENCE_RULES = ["exact", "normalized", "content"]
