# ── Generator defaults ───────────────────────────────────────
DEFAULT_DICT_INDEX   = 8      # DICT_6X6_50
DEFAULT_MARKER_ID    = 0
DEFAULT_MARKER_SIZE  = 300    # px
DEFAULT_BORDER_BITS  = 1
DEFAULT_SHOW_HELP    = True

MIN_MARKER_SIZE      = 50
MAX_MARKER_SIZE      = 4096
MARKER_SIZE_STEP     = 50
MIN_BORDER_BITS      = 0
MAX_BORDER_BITS      = 7

MIN_MARGIN           = 30     # white padding around the marker
MARGIN_DIVISOR       = 5      # margin = max(MIN_MARGIN, size // MARGIN_DIVISOR)

AUTO_NAME_TEMPLATE   = "marker_{dict}_id{id}_{size}px_bb{border}.png"

# ── Status panel ─────────────────────────────────────────────
PANEL_LINE_HEIGHT    = 20
PANEL_PADDING        = 10
PANEL_BASE_LINES     = 6      # title + dict + id + size + border + save
PANEL_HELP_LINES     = 4      # half-gap + 3 legend lines
PANEL_FONT_SCALE     = 0.5
NOTICE_FONT_SCALE    = 0.6

# ── UI Colors (BGR) ──────────────────────────────────────────
COLOR_OUTLINE   = (0, 0, 0)
COLOR_TITLE     = (255, 255, 255)
COLOR_INFO      = (0, 255, 0)
COLOR_HELP      = (200, 200, 200)
COLOR_SAVED     = (0, 255, 255)
COLOR_ERROR     = (0, 0, 255)
COLOR_MARKER    = (0, 255, 0)
COLOR_FPS       = (255, 255, 255)
COLOR_PANEL_BG  = (20, 20, 20)

# ── Keys (cv2.waitKeyEx codes) ───────────────────────────────
KEY_ESC    = 27
# Linux/X11 first, Windows second
KEY_LEFT   = (65361, 2424832)
KEY_UP     = (65362, 2490368)
KEY_RIGHT  = (65363, 2555904)
KEY_DOWN   = (65364, 2621440)

# ── Windows ──────────────────────────────────────────────────
GENERATOR_WINDOW = "ArUco Marker"
DETECT_WINDOW    = "Aruco Detect"

# ── Detection demo ───────────────────────────────────────────
CAMERA_INDEX        = 0
FRAME_WIDTH         = 640
FRAME_HEIGHT        = 480
DETECT_DICT         = "DICT_6X6_50"
FPS_EMA_ALPHA       = 0.9    # weight of the running average
MAX_CAMERA_PROBE    = 10     # indices probed by tools.list_cameras

# ── Batch export ─────────────────────────────────────────────
EXPORT_DIR          = "markers"
