"""
Serializable DOM evaluators used by the extraction strategies.

An evaluator is a named JavaScript function plus the JSON argument it is
called with inside the rendered page. The scripts only collect raw
measurements and text; everything that decides what counts as a product
happens in Python on the returned data.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from ..config import ExtractionConfig

CARD_SCAN = "card_scan"
IMAGE_ANCESTOR_SCAN = "image_ancestor_scan"
BLOCK_SCAN = "block_scan"


class Evaluator(BaseModel):
    """A DOM inspection routine that can cross the page boundary."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Stable identifier, used in logs and tests")
    script: str = Field(..., description="JavaScript function taking one argument")
    arg: Dict[str, Any] = Field(default_factory=dict)


# Returns one raw card per element matched by a single selector.
CARD_SCAN_SCRIPT = """
(settings) => {
    let elements;
    try {
        elements = document.querySelectorAll(settings.selector);
    } catch (error) {
        return [];
    }
    const textOf = (root, selector) => {
        const node = root.querySelector(selector);
        return node && node.textContent ? node.textContent : '';
    };
    return Array.from(elements).map((el) => {
        const img = el.querySelector('img');
        let imageUrl = '';
        if (img) {
            imageUrl = img.src || img.getAttribute(settings.lazyImageAttribute) || '';
        }
        return {
            imageUrl,
            name: textOf(el, settings.nameSelector),
            description: textOf(el, settings.descriptionSelector),
            price: textOf(el, settings.priceSelector),
        };
    });
}
"""

# For each large image, the texts found at each ancestor level above it.
IMAGE_ANCESTOR_SCAN_SCRIPT = """
(settings) => {
    const images = Array.from(document.querySelectorAll('img')).filter((img) => {
        const rect = img.getBoundingClientRect();
        return rect.width > settings.minWidth && rect.height > settings.minHeight;
    });
    return images.map((img) => {
        const levels = [];
        let container = img.parentElement;
        for (let i = 0; i < settings.maxLevels && container; i++) {
            const nodes = container.querySelectorAll(settings.textSelector);
            levels.push(Array.from(nodes).map((node) => node.textContent || ''));
            container = container.parentElement;
        }
        return { imageUrl: img.src || '', levels };
    });
}
"""

# Every container holding an image, with its rendered measurements.
BLOCK_SCAN_SCRIPT = """
(settings) => {
    const blocks = [];
    document.querySelectorAll(settings.blockSelector).forEach((el) => {
        const img = el.querySelector('img');
        if (!img) {
            return;
        }
        blocks.push({
            text: el.textContent || '',
            display: window.getComputedStyle(el).display,
            height: el.getBoundingClientRect().height,
            imageUrl: img.src || '',
        });
    });
    return blocks;
}
"""


def card_scan(selector: str, settings: ExtractionConfig) -> Evaluator:
    """Build the evaluator that reads product cards matched by ``selector``."""
    return Evaluator(
        name=CARD_SCAN,
        script=CARD_SCAN_SCRIPT,
        arg={
            "selector": selector,
            "nameSelector": settings.name_selector,
            "descriptionSelector": settings.description_selector,
            "priceSelector": settings.price_selector,
            "lazyImageAttribute": settings.lazy_image_attribute,
        },
    )


def image_ancestor_scan(settings: ExtractionConfig) -> Evaluator:
    """Build the evaluator that collects text around prominent images."""
    return Evaluator(
        name=IMAGE_ANCESTOR_SCAN,
        script=IMAGE_ANCESTOR_SCAN_SCRIPT,
        arg={
            "minWidth": settings.min_image_width,
            "minHeight": settings.min_image_height,
            "maxLevels": settings.max_ancestor_levels,
            "textSelector": settings.text_selector,
        },
    )


def block_scan(settings: ExtractionConfig) -> Evaluator:
    """Build the evaluator that measures every image-bearing container."""
    return Evaluator(
        name=BLOCK_SCAN,
        script=BLOCK_SCAN_SCRIPT,
        arg={"blockSelector": settings.block_selector},
    )
