"""WebP decoding and JPEG/PNG encoding backed by Pillow."""

import logging
from io import BytesIO

from PIL import Image, UnidentifiedImageError, features

from webpconv.data_models import DecodedImage, OutputFormat


MAX_QUALITY = 100


class DecodeError(Exception):
    """Exception raised when input bytes are not decodable WebP data."""
    pass


class EncodeError(Exception):
    """Exception raised when pixel data cannot be encoded to the target format."""
    pass


def check_webp_support() -> bool:
    """
    Check if the installed Pillow build can decode WebP.

    Returns:
        bool: True if WebP support is available, False otherwise
    """
    return bool(features.check("webp"))


class WebPDecoder:
    """Decodes WebP bitstreams into raw RGB/RGBA pixel data."""

    def decode(self, data: bytes) -> DecodedImage:
        """
        Decode a WebP byte buffer.

        Args:
            data: Full contents of a .webp file

        Returns:
            DecodedImage with dimensions, alpha flag and row-major pixels

        Raises:
            DecodeError: If the data is not WebP or the codec rejects it
        """
        try:
            with Image.open(BytesIO(data), formats=["WEBP"]) as img:
                img.load()
                has_alpha = "A" in img.getbands() or "transparency" in img.info
                decoded = img.convert("RGBA" if has_alpha else "RGB")
        except UnidentifiedImageError as e:
            raise DecodeError("Unable to load WebP image: not a WebP bitstream") from e
        except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
            raise DecodeError(f"Unable to load WebP image: {e}") from e

        width, height = decoded.size
        logging.debug(f"Decoded WebP image {width}x{height} ({decoded.mode})")
        return DecodedImage(
            width=width,
            height=height,
            has_alpha=has_alpha,
            pixels=decoded.tobytes(),
        )


class ImageEncoder:
    """Encodes decoded pixel data as JPEG or PNG."""

    # JPEG has no alpha channel, transparent areas become this colour
    BACKGROUND = (255, 255, 255)

    def encode(self, image: DecodedImage, output_format: OutputFormat,
               quality: int = MAX_QUALITY) -> bytes:
        """
        Encode a decoded image into the target container format.

        Args:
            image: Decoded pixel data
            output_format: JPEG or PNG
            quality: JPEG quality, 1-100 (ignored for PNG)

        Returns:
            Encoded file contents

        Raises:
            EncodeError: If the pixel buffer or format cannot be encoded
        """
        try:
            pil_image = Image.frombytes(image.mode, (image.width, image.height), image.pixels)

            if output_format is OutputFormat.JPEG and image.has_alpha:
                pil_image = self._flatten(pil_image)

            buffer = BytesIO()
            if output_format is OutputFormat.JPEG:
                pil_image.save(buffer, output_format.pil_format, quality=quality, subsampling=0)
            else:
                pil_image.save(buffer, output_format.pil_format)
        except (OSError, ValueError, KeyError) as e:
            raise EncodeError(f"Unable to encode image as {output_format.value}: {e}") from e

        data = buffer.getvalue()
        logging.debug(f"Encoded {image.width}x{image.height} image as {output_format.value} ({len(data)} bytes)")
        return data

    def _flatten(self, pil_image: Image.Image) -> Image.Image:
        """Composite an RGBA image onto a solid background."""
        background = Image.new("RGB", pil_image.size, self.BACKGROUND)
        background.paste(pil_image, mask=pil_image.split()[-1])
        return background
