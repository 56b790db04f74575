"""
Our data: curated spiral palettes (hex anchors). Used by PaletteSource in "palette" mode.
Order inside each preset is the interpolation order and is never changed.
"""
PALETTE_HEX: tuple[tuple[str, ...], ...] = (
    # Vibrant neon
    ("#12c2e9", "#c471ed", "#f64f59"),
    ("#f7971e", "#ffd200", "#ff416c"),
    # Cyberpunk / futuristic
    ("#0f0c29", "#302b63", "#24243e"),
    ("#833ab4", "#fd1d1d", "#fcb045"),
    # Sunset glow
    ("#ee9ca7", "#ffdde1", "#ff6a00"),
    ("#fcb045", "#fd1d1d", "#833ab4"),
    # Nature + aqua
    ("#11998e", "#38ef7d", "#00c9ff"),
    ("#43cea2", "#185a9d", "#2af598"),
    # Pastel blend
    ("#fbc2eb", "#a6c1ee", "#d4fc79"),
    ("#fddb92", "#d1fdff", "#fcb69f"),
    # Luxury gold
    ("#d4af37", "#ffd700", "#ffecb3"),
    ("#3a1c71", "#d76d77", "#ffaf7b"),
    # AI / cloud
    ("#00d2ff", "#3a7bd5", "#00c6ff"),
    ("#6a11cb", "#2575fc", "#00f2fe"),
    # Deep space + purple
    ("#000428", "#004e92", "#373B44"),
    ("#41295a", "#2F0743", "#734b6d"),
    # Tetradic
    ("#ff6b6b", "#ffe66d", "#4ecdc4", "#1a535c"),
    # Analogous romance
    ("#ff9a8b", "#ff6b6b", "#ff8e9d", "#ff7eb3"),
)
