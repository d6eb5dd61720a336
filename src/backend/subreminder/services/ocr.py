"""
OCR service for extracting text from receipt and screenshot images.
"""

import io
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pytesseract
from PIL import Image, ImageEnhance, UnidentifiedImageError

from subreminder.config import settings

logger = logging.getLogger(__name__)


class OCRError(Exception):
    """Base class for text recognition failures."""


class InvalidImageError(OCRError):
    """The bytes could not be decoded as an image."""


class RecognitionError(OCRError):
    """Tesseract failed to run or returned unusable output."""


class NoTextFoundError(OCRError):
    """Recognition succeeded but found no text."""


class LowConfidenceError(OCRError):
    """Text was found but is too unreliable to parse."""


@dataclass
class RecognizedLine:
    text: str
    confidence: float  # 0..1


@dataclass
class RecognitionResult:
    """Recognized lines in reading order."""
    lines: List[RecognizedLine] = field(default_factory=list)

    @property
    def full_text(self) -> str:
        return "\n".join(line.text for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not any(line.text.strip() for line in self.lines)

    @property
    def average_confidence(self) -> float:
        if not self.lines:
            return 0.0
        return sum(line.confidence for line in self.lines) / len(self.lines)


class OCRService:
    """Service for extracting text from images."""

    def __init__(self):
        """Initialize OCR service with Tesseract configuration."""
        pytesseract.pytesseract.tesseract_cmd = settings.TESSERACT_CMD

    def recognize_text(self, image_data: bytes) -> RecognitionResult:
        """
        Run Tesseract over an image and group words into lines.

        Args:
            image_data: Raw image bytes (JPEG, PNG, etc.)

        Returns:
            RecognitionResult with per-line confidences

        Raises:
            InvalidImageError: If the bytes are not a readable image
            RecognitionError: If Tesseract fails
        """
        image = self._load_image(image_data)
        image = self._preprocess_image(image)

        try:
            custom_config = r'--oem 3 --psm 6'
            data = pytesseract.image_to_data(
                image,
                lang=settings.OCR_LANGUAGES,
                config=custom_config,
                output_type=pytesseract.Output.DICT,
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, RuntimeError) as e:
            logger.error("Tesseract failed: %s", e)
            raise RecognitionError(str(e)) from e

        result = self._group_lines(data)
        logger.debug(
            "Recognized %d lines, average confidence %.2f",
            len(result.lines), result.average_confidence
        )
        return result

    def extract_text_for_parsing(self, image_data: bytes) -> RecognitionResult:
        """
        Recognize text and reject results not worth parsing.

        Raises:
            NoTextFoundError: If no text was recognized
            LowConfidenceError: If average confidence is below OCR_MIN_CONFIDENCE
        """
        result = self.recognize_text(image_data)

        if result.is_empty:
            raise NoTextFoundError("No text found in image")
        if result.average_confidence < settings.OCR_MIN_CONFIDENCE:
            raise LowConfidenceError(
                "Text recognition quality too low. Try a clearer image."
            )
        return result

    def _load_image(self, image_data: bytes) -> Image.Image:
        try:
            image = Image.open(io.BytesIO(image_data))
            image.load()
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise InvalidImageError("Invalid image data") from e
        return image

    def _preprocess_image(self, image: Image.Image) -> Image.Image:
        """
        Preprocess image to improve OCR accuracy.

        Large images are downsampled (aspect ratio kept), then converted to
        grayscale with boosted contrast for faded receipts.
        """
        max_dim = settings.OCR_MAX_DIMENSION
        if max(image.size) > max_dim:
            image.thumbnail((max_dim, max_dim))

        if image.mode != 'RGB':
            image = image.convert('RGB')
        image = image.convert('L')

        enhancer = ImageEnhance.Contrast(image)
        return enhancer.enhance(2.0)

    def _group_lines(self, data: Dict[str, list]) -> RecognitionResult:
        """Join Tesseract words into lines keyed by block, paragraph and line number."""
        grouped: Dict[Tuple[int, int, int], List[Tuple[str, float]]] = {}

        for i, word in enumerate(data.get('text', [])):
            word = (word or "").strip()
            conf = self._word_confidence(data['conf'][i])
            if not word or conf is None:
                continue
            key = (data['block_num'][i], data['par_num'][i], data['line_num'][i])
            grouped.setdefault(key, []).append((word, conf))

        lines = []
        for key in sorted(grouped):
            words = grouped[key]
            text = " ".join(w for w, _ in words)
            confidence = sum(c for _, c in words) / len(words) / 100
            lines.append(RecognizedLine(text=text, confidence=confidence))
        return RecognitionResult(lines=lines)

    @staticmethod
    def _word_confidence(raw) -> Optional[float]:
        # Tesseract reports -1 for rows that are not words
        try:
            conf = float(raw)
        except (TypeError, ValueError):
            return None
        return conf if conf >= 0 else None
