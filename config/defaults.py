"""Default configuration constants for the Classroom Seating Editor."""

# Grid dimensions
DEFAULT_ROWS = 6
DEFAULT_COLS = 8
MIN_ROWS = 1
MAX_ROWS = 15
MIN_COLS = 1
MAX_COLS = 12

# Undo/redo history depth
MAX_HISTORY_SIZE = 5

# Pointer travel (pixels, either axis) before a press becomes a drag
DRAG_THRESHOLD = 5

# Marquee selection: a seat is picked when its centre is inside the box
# or at least this fraction of its area is covered
MARQUEE_OVERLAP_RATIO = 0.3

# Genders
GENDER_MALE = "male"
GENDER_FEMALE = "female"
GENDER_UNSET = ""
GENDER_LABELS = {
    GENDER_MALE: "Male",
    GENDER_FEMALE: "Female",
    GENDER_UNSET: "",
}
GENDER_ALIASES = {
    GENDER_MALE: ["male", "m", "boy", "男"],
    GENDER_FEMALE: ["female", "f", "girl", "女"],
}

# Seat colours used by the renderer
MALE_COLOR = "#2563eb"
FEMALE_COLOR = "#ec4899"
EMPTY_COLOR = "#e5e7eb"
DELETED_COLOR = "#ffffff"

# History action names
ACTION_SEAT_ARRANGEMENT = "seatArrangement"
ACTION_BLOCK_MOVE = "blockMove"
ACTION_BULK_ARRANGEMENT = "bulkArrangement"
ACTION_SUGGESTED_LAYOUT = "suggestedArrangement"
ACTION_ROSTER_IMPORT = "rosterImport"
ACTION_LAYOUT_CHANGE = "layoutChange"

# Rule-based arrangement orders
ARRANGE_BY_ROW = "row"
ARRANGE_BY_COLUMN = "column"

# Rotation directions
ROTATE_ROW_LEFT = "rowLeft"
ROTATE_ROW_RIGHT = "rowRight"
ROTATE_COL_FORWARD = "colForward"
ROTATE_COL_BACKWARD = "colBackward"
ROTATE_DIRECTIONS = [ROTATE_ROW_LEFT, ROTATE_ROW_RIGHT, ROTATE_COL_FORWARD, ROTATE_COL_BACKWARD]

# Roster spreadsheet column aliases (case-insensitive matching)
COLUMN_ALIASES = {
    "name": ["name", "student name", "姓名", "名字"],
    "external_id": ["id", "student id", "student number", "学号"],
    "gender": ["gender", "sex", "性别"],
    "height": ["height", "身高"],
    "notes": ["notes", "note", "remarks", "requirements", "备注", "要求"],
    "seat": ["seat", "seat coordinate", "座位", "座位号"],
}
