DEFAULT_PALETTE = {
    "wall": (30, 34, 48),
    "pass": (245, 245, 248),
    "start": (87, 197, 182),
    "goal": (255, 92, 87),
    "visited": (98, 114, 164),
    "glow_outer": (255, 199, 0),
    "glow_inner": (255, 230, 120),
    "grid": (255, 255, 255),
    "bg": (17, 17, 23),
    "no_path": (255, 92, 87),
}
