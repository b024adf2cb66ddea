# -*- coding: utf-8 -*-
"""
    Classification of HTML tags into block and inline elements.

    :copyright: (c) 2011 by Armin Ronacher and Feldman Stanislav.
    :license: BSD, see LICENSE for more details.
"""

block_elements = frozenset((
    'article', 'aside', 'div', 'dt', 'caption', 'footer', 'form', 'header',
    'hgroup', 'html', 'map', 'nav', 'section', 'body', 'p', 'dl', 'multicol',
    'dd', 'blockquote', 'figure', 'address', 'center', 'title', 'meta',
    'link', 'head', 'script', 'br', '!DOCTYPE', 'h1', 'h2', 'h3', 'h4', 'h5',
    'h6', 'pre', 'ul', 'menu', 'dir', 'ol', 'li', 'tr', 'tbody', 'thead',
    'tfoot', 'td', 'th'))

# Literal prefixes, so "<divider>" is seen as starting with "<div".
_BLOCK_STARTS = tuple(sorted(
    ['<' + tag for tag in block_elements] +
    ['</' + tag for tag in block_elements]))


def starts_with_block_element(text):
    '''Test if the text begins with a block element open or close tag.'''
    return text.startswith(_BLOCK_STARTS)


def ends_with_block_element(text):
    '''Test if the last tag of the text is a block element tag.'''
    if not text.endswith('>'):
        return False
    start = text.rfind('<')
    if start < 0:
        return False
    return starts_with_block_element(text[start:])
