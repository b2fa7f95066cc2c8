"""
Block Mosaic — Gallery Edition

Run with:
    streamlit run streamlit_app.py
"""

from __future__ import annotations

import io
import time
from pathlib import Path

import streamlit as st
from PIL import Image, ImageDraw, UnidentifiedImageError

from block_mosaic.composer import make_mosaic
from block_mosaic.config import MosaicConfig
from block_mosaic.errors import MosaicError
from block_mosaic.image_io import RESAMPLE_FILTERS, compute_proxy_size, load_image
from block_mosaic.materials import format_materials, format_stacks, materials_report
from block_mosaic.palette import load_palette
from block_mosaic.patterns import NameFilter

# -- Page config -------------------------------------------------------
st.set_page_config(
    page_title="Block Mosaic",
    page_icon=None,
    layout="wide",
    initial_sidebar_state="collapsed",
)

_DEFAULTS = MosaicConfig()

# -- CSS ---------------------------------------------------------------
st.markdown("""
<style>
    @import url('https://fonts.googleapis.com/css2?family=Cormorant+Garamond:ital,wght@0,300;0,400;1,300&family=Inter:wght@200;300;400&display=swap');

    .stApp {
        background-color: #faf9f6;
        color: #2a2a2a;
        font-family: 'Inter', 'Helvetica Neue', sans-serif;
    }
    .block-container {
        max-width: 1000px;
        padding-top: 3.5rem;
        padding-bottom: 4rem;
    }
    .gallery-title {
        font-family: 'Cormorant Garamond', 'Georgia', serif;
        font-size: 2.8rem;
        font-weight: 300;
        text-align: center;
        color: #1a1a1a;
        border-bottom: 1px solid #1a1a1a;
        padding-bottom: 0.6rem;
        margin-bottom: 0.5rem;
    }
    .gallery-subtitle {
        font-size: 0.75rem;
        font-weight: 300;
        line-height: 1.8;
        margin-bottom: 3rem;
    }
    .label-detail {
        font-family: 'Cormorant Garamond', 'Georgia', serif;
        font-style: italic;
        text-align: center;
        color: #6a6a64;
    }
    .processing-text {
        font-family: 'Cormorant Garamond', serif;
        font-style: italic;
        color: #a0a09a;
        padding: 1.5rem 0;
    }
    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
    header {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


# -- Helpers -----------------------------------------------------------

def _add_passepartout(img: Image.Image, border: int = 20) -> Image.Image:
    w, h = img.size
    bg = (250, 249, 246)
    canvas = Image.new("RGB", (w + border * 2, h + border * 2), bg)
    canvas.paste(img, (border, border))
    draw = ImageDraw.Draw(canvas)
    draw.rectangle(
        [border - 1, border - 1, border + w, border + h],
        outline=(224, 222, 216), width=1,
    )
    return canvas


def _parse_patterns(text: str) -> list[str]:
    return [p.strip() for p in text.replace(",", "\n").splitlines() if p.strip()]


# -- Title -------------------------------------------------------------
st.markdown(
    '<div class="gallery-title">Block Mosaic</div>',
    unsafe_allow_html=True,
)
st.markdown(
    '<div class="gallery-subtitle">'
    "Upload any image and it will be rebuilt out of texture blocks. The image "
    "is shrunk to a grid of blocks and every block is replaced by the texture "
    "whose average colour is closest. A list of the blocks you need to build "
    "it comes with the result."
    "</div>",
    unsafe_allow_html=True,
)

# -- Controls ----------------------------------------------------------
ctrl1, ctrl2 = st.columns(2)
with ctrl1:
    block_width = st.slider("Width (blocks)", 8, 256, _DEFAULTS.block_width)
    textures_dir = st.text_input("Texture folder", str(_DEFAULTS.textures_dir))
with ctrl2:
    filters = list(RESAMPLE_FILTERS)
    resample_filter = st.selectbox(
        "Resample filter", filters, index=filters.index(_DEFAULTS.resample_filter),
    )
    exclude_text = st.text_input("Exclude blocks", "", help="e.g. *glass*, tnt*")

st.markdown("---")

# -- Upload ------------------------------------------------------------
uploaded = st.file_uploader(
    "Select artwork", type=["jpg", "jpeg", "png", "webp", "bmp", "jfif"],
)

if uploaded is not None:
    try:
        original = load_image(io.BytesIO(uploaded.getvalue()))
    except (UnidentifiedImageError, OSError) as exc:
        st.error(f"Could not read the uploaded image: {exc}")
        st.stop()

    try:
        w, h = compute_proxy_size(original.width, original.height, block_width)
    except MosaicError as exc:
        st.error(str(exc))
        st.stop()

    st.image(original, use_container_width=True)
    st.markdown(
        f'<div class="label-detail">{w} &times; {h} blocks</div>',
        unsafe_allow_html=True,
    )

    if st.button("COMPOSE", type="primary", use_container_width=True):
        progress = st.empty()
        progress.markdown(
            '<div class="processing-text">Composing ...</div>',
            unsafe_allow_html=True,
        )

        cfg = MosaicConfig(
            block_width=block_width,
            resample_filter=resample_filter,
            textures_dir=Path(textures_dir),
        )
        t0 = time.perf_counter()
        try:
            palette = load_palette(
                cfg.textures_dir,
                resolution=cfg.tile_resolution,
                name_filter=NameFilter.from_strings(exclude=_parse_patterns(exclude_text)),
                extensions=cfg.TILE_EXTENSIONS,
            )
            result = make_mosaic(original, palette, cfg)
        except MosaicError as exc:
            progress.empty()
            st.error(str(exc))
            st.stop()
        elapsed = time.perf_counter() - t0
        progress.empty()

        st.markdown("---")

        mosaic_img = Image.fromarray(result.canvas)
        st.image(_add_passepartout(mosaic_img, border=28), use_container_width=True)

        buf = io.BytesIO()
        mosaic_img.save(buf, format="PNG")
        report = materials_report(result.tally)

        dl1, dl2 = st.columns(2)
        with dl1:
            st.download_button(
                "SAVE ART",
                data=buf.getvalue(),
                file_name="block_mosaic.png",
                mime="image/png",
                use_container_width=True,
            )
        with dl2:
            st.download_button(
                "SAVE MATERIALS",
                data=format_materials(report) + "\n",
                file_name="materials.txt",
                mime="text/plain",
                use_container_width=True,
            )

        m1, m2, m3, m4 = st.columns(4)
        m1.metric("Grid", f"{w} × {h}")
        m2.metric("Blocks", f"{result.total_blocks:,}")
        m3.metric("Kinds", f"{len(report)}")
        m4.metric("Time", f"{elapsed:.1f} s")

        st.dataframe(
            [
                {"block": name, "count": count, "stacks": format_stacks(count)}
                for name, count in report
            ],
            use_container_width=True,
            hide_index=True,
        )

else:
    st.markdown(
        '<p style="font-family: Cormorant Garamond, Georgia, serif; '
        "color: #bbb; font-size: 1rem; font-weight: 300; "
        'font-style: italic; margin-top: 2rem;">'
        "Select an artwork to begin.</p>",
        unsafe_allow_html=True,
    )
