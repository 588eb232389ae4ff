from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from beatdeck.Core import LOST, WON
from beatdeck_ui.ui_config import FONT_SCALE_FACTOR, GRID_COLUMNS, THEMES
from beatdeck_ui.view_model import GameViewModel

CARD_W, CARD_H = 96, 129
GAP = 16
MARGIN = 24
HUD_H = 56
RED_SUITS = {"HEARTS", "DIAMONDS"}


def get_font(size):
    for name in ("DejaVuSans-Bold.ttf", "Arial.ttf", "Helvetica.ttc"):
        try:
            return ImageFont.truetype(name, size=size)
        except Exception:
            continue
    return ImageFont.load_default()


def board_size(columns=GRID_COLUMNS, rows=GRID_COLUMNS):
    width = MARGIN * 2 + columns * CARD_W + (columns - 1) * GAP
    height = MARGIN * 2 + HUD_H + rows * CARD_H + (rows - 1) * GAP
    return width, height


def hex_to_rgb(color: str):
    color = color.lstrip("#")
    return tuple(int(color[i:i + 2], 16) for i in (0, 2, 4))


def suit_color(suit):
    return (190, 40, 40) if suit in RED_SUITS else (35, 35, 45)


def draw_heart(draw, cx, cy, s, fill):
    r = s // 3
    draw.ellipse((cx - r - r // 2, cy - r, cx - r // 2, cy), fill=fill)
    draw.ellipse((cx + r // 2, cy - r, cx + r + r // 2, cy), fill=fill)
    draw.polygon([(cx - s // 2, cy), (cx + s // 2, cy), (cx, cy + s // 2 + s // 4)], fill=fill)


def draw_diamond(draw, cx, cy, s, fill):
    draw.polygon([(cx, cy - s // 2), (cx + s // 2, cy), (cx, cy + s // 2), (cx - s // 2, cy)], fill=fill)


def draw_club(draw, cx, cy, s, fill):
    r = s // 4
    draw.ellipse((cx - r - r, cy - r, cx - r, cy + r), fill=fill)
    draw.ellipse((cx + r, cy - r, cx + r + r, cy + r), fill=fill)
    draw.ellipse((cx - r, cy - r - r, cx + r, cy), fill=fill)
    draw.rectangle((cx - r // 3, cy + r, cx + r // 3, cy + s // 2), fill=fill)


def draw_spade(draw, cx, cy, s, fill):
    # upside-down heart + stem
    r = s // 3
    draw.ellipse((cx - r - r // 2, cy, cx - r // 2, cy + r), fill=fill)
    draw.ellipse((cx + r // 2, cy, cx + r + r // 2, cy + r), fill=fill)
    draw.polygon([(cx - s // 2, cy + r), (cx + s // 2, cy + r), (cx, cy - s // 2 + r // 2)], fill=fill)
    draw.rectangle((cx - r // 3, cy + r, cx + r // 3, cy + s // 2 + r // 3), fill=fill)


SUIT_DRAWERS = {
    "SPADES": draw_spade,
    "HEARTS": draw_heart,
    "CLUBS": draw_club,
    "DIAMONDS": draw_diamond,
}


def draw_centered_text(draw, cx, cy, text, fill, font):
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    draw.text((cx - (right - left) // 2 - left, cy - (bottom - top) // 2 - top), text, fill=fill, font=font)


def draw_stack(draw, stack, x, y, theme, font):
    if stack.flipped:
        draw.rectangle((x, y, x + CARD_W, y + CARD_H), fill=hex_to_rgb(theme["card_back"]),
                       outline=hex_to_rgb(theme["card_border"]), width=2)
        # hatch pattern for flipped stacks
        for i in range(0, CARD_W, 12):
            draw.line((x + i, y + 6, x + i + 10, y + CARD_H - 6), fill=hex_to_rgb(theme["hud_subtext"]), width=1)
        return
    outline = theme["card_select"] if stack.selected else theme["card_border"]
    width = 5 if stack.selected else 2
    draw.rectangle((x, y, x + CARD_W, y + CARD_H), fill=hex_to_rgb(theme["card_front"]),
                   outline=hex_to_rgb(outline), width=width)
    color = suit_color(stack.suit)
    draw_centered_text(draw, x + CARD_W // 2, y + CARD_H // 3, stack.rank_label, color, font)
    drawer = SUIT_DRAWERS.get(stack.suit)
    if drawer is not None:
        drawer(draw, x + CARD_W // 2, y + CARD_H * 2 // 3, 28, color)


def render_board(view_model: GameViewModel, theme_name="Forest", font_scale="Normal") -> Image.Image:
    theme = THEMES.get(theme_name, THEMES["Forest"])
    scale = FONT_SCALE_FACTOR.get(font_scale, 1.0)
    width, height = board_size()
    img = Image.new("RGB", (width, height), hex_to_rgb(theme["bg_base"]))
    d = ImageDraw.Draw(img)
    card_font = get_font(int(28 * scale))
    hud_font = get_font(int(18 * scale))

    for stack in view_model.stacks:
        row, col = divmod(stack.index, GRID_COLUMNS)
        x = MARGIN + col * (CARD_W + GAP)
        y = MARGIN + HUD_H + row * (CARD_H + GAP)
        draw_stack(d, stack, x, y, theme, card_font)

    d.text((MARGIN, MARGIN), f"Cards remaining in deck: {view_model.remaining_count}",
           fill=hex_to_rgb(theme["hud_text"]), font=hud_font)
    if view_model.status == WON:
        d.text((MARGIN, MARGIN + 26), "You won!", fill=hex_to_rgb(theme["win"]), font=hud_font)
    elif view_model.status == LOST:
        d.text((MARGIN, MARGIN + 26), "You lost.", fill=hex_to_rgb(theme["lose"]), font=hud_font)
    return img


def save_board_image(view_model: GameViewModel, path, theme_name="Forest", font_scale="Normal") -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    render_board(view_model, theme_name, font_scale).save(path, format="PNG")
    return path
