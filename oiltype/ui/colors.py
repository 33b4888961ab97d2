"""Theme colors and color utilities for the UI."""


class GameColors:
    """Dark palette used by the typing screen."""

    BG_MAIN = "#050505"
    CARD_BG = "#0c0c0c"
    CARD_BORDER = "rgba(255, 255, 255, 0.1)"

    ACCENT = "#f59e0b"
    ACCENT_DARK = "#b45309"
    TYPED = "#10b981"
    REMAINING = "#ffffff"
    DANGER = "#ef4444"

    TEXT_PRIMARY = "#ffffff"
    TEXT_SECONDARY = "#a1a1aa"
    TEXT_MUTED = "#52525b"


# Below this many seconds the clock starts shifting toward DANGER.
CLOCK_WARNING_SECONDS = 10.0


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    a = a.strip()
    b = b.strip()
    if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
        return a
    try:
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
    except ValueError:
        return a
    t = max(0.0, min(1.0, float(t)))
    r = int(ar + (br - ar) * t)
    g = int(ag + (bg - ag) * t)
    bl = int(ab + (bb - ab) * t)
    return f"#{r:02X}{g:02X}{bl:02X}"


def clock_color(seconds_left: float) -> str:
    """Clock text color: white until the warning threshold, then fading to red."""
    if seconds_left >= CLOCK_WARNING_SECONDS:
        return blend_hex(GameColors.TEXT_PRIMARY, GameColors.DANGER, 0.0)
    t = 1.0 - max(0.0, seconds_left) / CLOCK_WARNING_SECONDS
    return blend_hex(GameColors.TEXT_PRIMARY, GameColors.DANGER, t)
