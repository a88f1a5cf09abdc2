# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""Media Info Utils - metadata, orientation and type summaries for media files."""

from mediainfoutils.__about__ import __version__

__all__ = ["__version__"]
