# -*- coding: utf-8 -*-
"""
    HTML minification of static template text, one fragment at a time.

    The minifier never sees a whole document. It is handed the static
    fragments of a template in order, together with a small
    :class:`StreamState` describing how the previous fragment ended, and
    returns the rewritten fragment with the state to hand to the next one.

    :copyright: (c) 2011 by Armin Ronacher and Feldman Stanislav.
    :license: BSD, see LICENSE for more details.
"""
import logging
import re
from collections import namedtuple

from squeezinja.blocks import starts_with_block_element, \
    ends_with_block_element


log = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r'[\n\r]')
_WS_SPLIT_RE = re.compile(r'[ \t\r\n]+')
_COMMENT_MARKERS = ('{', '}', 'function', 'var', '[if', '[endif')


MinifierConfig = namedtuple('MinifierConfig', [
    'comments', 'aggressive', 'javascript', 'css', 'minify_js', 'minify_css',
])
MinifierConfig.__new__.__defaults__ = (True, True, True, True, None, None)
MinifierConfig.__doc__ = '''
Immutable minifier settings.

``comments``, ``aggressive``, ``javascript`` and ``css`` switch the
matching stages on or off. ``minify_js`` and ``minify_css`` are optional
callables taking and returning source code; without one the matching
stage does nothing.
'''


class StreamState(namedtuple('StreamState', [
        'previous_is_whitespace', 'previous_token_ends_with_block',
        'inside_script'])):
    '''What the minifier knows about the text written before a fragment.'''
    __slots__ = ()

    def after_dynamic(self):
        '''
        State after text computed at render time, whose last character
        can't be known while compiling.
        '''
        return self._replace(previous_is_whitespace=False,
                             previous_token_ends_with_block=False)


#: State at the start of a document, which behaves like it follows a
#: block element and whitespace.
INITIAL_STATE = StreamState(True, True, False)


def is_blank(content):
    '''Test if the text is empty or only made of whitespace.'''
    return not content or content.isspace()


def strip_comments(content):
    '''
    Remove HTML comments, stopping at the first one that looks like it
    holds javascript or an IE conditional. That comment and all the ones
    after it are kept, as is an unterminated comment.
    '''
    start = content.find('<!--')
    while start >= 0:
        end = content.find('-->', start + 3)
        if end < 0:
            break
        body = content[start + 4:end]
        if any(marker in body for marker in _COMMENT_MARKERS):
            break
        content = content[:start] + content[end + 3:]
        start = content.find('<!--', start)
    return content


def minify_safely(content, previous_is_whitespace):
    '''
    Trim the indentation and drop blank lines while keeping the rendering
    identical. Blanks between tags on the same line are left alone.
    '''
    if not content:
        return content
    output = []
    lines = [line for line in _LINE_SPLIT_RE.split(content) if line]
    ends_with_newline = content[-1] in '\n\r'
    for idx, line in enumerate(lines):
        trimmed = line.strip()
        if not trimmed:
            continue
        if not previous_is_whitespace and line[0].isspace() and \
                trimmed[0] != '<':
            # A word split from the previous text by the line break
            output.append(' ')
        output.append(trimmed)
        has_end_of_line = idx < len(lines) - 1 or ends_with_newline
        ends_with_whitespace = line[-1].isspace() and trimmed[-1] != '>'
        if has_end_of_line:
            output.append('\n')
        elif ends_with_whitespace:
            output.append(' ')
        previous_is_whitespace = has_end_of_line or ends_with_whitespace
    return u''.join(output)


def minify_aggressively(content, previous_token_ends_with_block):
    '''
    Collapse all whitespace. A single space is kept between words and
    inline elements, none around block elements.
    '''
    if not content:
        return content
    output = []
    # Text glued to the fragment start needs no separator
    ends_with_block = previous_token_ends_with_block or \
        not content[0].isspace()
    for token in _WS_SPLIT_RE.split(content):
        if not token:
            continue
        if not ends_with_block and not starts_with_block_element(token):
            output.append(' ')
        output.append(token)
        ends_with_block = ends_with_block_element(token)
    if not ends_with_block and content[-1].isspace():
        output.append(' ')
    return u''.join(output)


def _call_hook(hook, code, tag):
    try:
        minified = hook(code)
    except Exception:
        log.debug('Failed to minify <%s> code, keeping it as-is.', tag,
                  exc_info=True)
        return code
    if not isinstance(minified, str):
        log.debug('The <%s> minifier returned %r, keeping the code as-is.',
                  tag, type(minified))
        return code
    return minified


def minify_embedded(content, tag, hook):
    '''
    Rewrite the body of every ``<tag>...</tag>`` element with ``hook``.

    The scan stops at the first element that isn't closed, or that
    self-closes before its closing tag, leaving the rest untouched.
    '''
    open_tag = '<' + tag
    close_tag = '</' + tag + '>'
    start = content.find(open_tag)
    while start >= 0:
        self_close = content.find('/>', start + len(open_tag))
        end = content.find(close_tag, start + len(open_tag))
        if end < 0 or 0 <= self_close < end:
            break
        code_start = content.find('>', start) + 1
        if code_start > end:
            break
        code = content[code_start:end]
        if not is_blank(code):
            code = _call_hook(hook, code, tag)
        content = content[:code_start] + code + content[end:]
        start = content.find(open_tag,
                             code_start + len(code) + len(close_tag))
    return content


class HtmlMinifier(object):
    '''
    Minifies static HTML fragments. Instances only hold their
    :class:`MinifierConfig` and can be shared between threads, the carried
    :class:`StreamState` belongs to the caller.
    '''

    def __init__(self, config=None):
        self.config = config or MinifierConfig()

    def minify(self, content, state=INITIAL_STATE):
        '''
        Minify one fragment. Returns the rewritten text and the state to
        pass along with the next fragment of the same document.
        '''
        if is_blank(content):
            return u'', state
        config = self.config

        if config.comments:
            content = strip_comments(content)

        if config.aggressive:
            content = minify_aggressively(
                content, state.previous_token_ends_with_block)
        else:
            content = minify_safely(content, state.previous_is_whitespace)

        if config.javascript and config.minify_js is not None:
            content = minify_embedded(content, 'script', config.minify_js)
        if config.css and config.minify_css is not None:
            content = minify_embedded(content, 'style', config.minify_css)

        return content, self.advance(content, state)

    def analyse(self, content):
        '''
        Tell if already minified text ends with whitespace and with a block
        element tag.
        '''
        return content[-1:].isspace(), ends_with_block_element(content)

    def advance(self, content, state):
        '''Carry ``state`` over text written without being minified.'''
        if is_blank(content):
            return state
        ends_with_whitespace, ends_with_block = self.analyse(content)
        return state._replace(
            previous_is_whitespace=ends_with_whitespace,
            previous_token_ends_with_block=ends_with_block)
