# -*- coding: utf-8 -*-
"""
    A Jinja2 extension that eliminates useless whitespace and comments at
    template compilation time without extra overhead.

    :copyright: (c) 2011 by Armin Ronacher and Feldman Stanislav.
    :license: BSD, see LICENSE for more details.
"""
from squeezinja.html import SelectiveHtmlCompressor, HtmlCompressor
from squeezinja.minifier import HtmlMinifier, MinifierConfig, StreamState, \
    INITIAL_STATE
from squeezinja.stream import StreamProcessContext, minify_fragments
