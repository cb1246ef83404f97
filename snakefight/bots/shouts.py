"""Pool of shouts a snake may attach to its move."""

SHOUTS: tuple[str, ...] = (
    "Hiss.",
    "Coming through!",
    "Left? Right? Who knows.",
    "I have no plan and I must move.",
    "Dice were rolled.",
    "Watch your tail.",
    "Fortune favours the bold.",
    "Sssssurprise!",
    "Is that food?",
    "Trust the process.",
    "Nothing personal.",
    "Long live the snake.",
    "That wall looks friendly.",
    "Wiggle wiggle.",
    "Definitely on purpose.",
    "Chaos is a ladder.",
)
