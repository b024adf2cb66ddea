# -*- coding: utf-8 -*-
"""
    Threading of the minifier state through the fragments of a document.

    :copyright: (c) 2011 by Armin Ronacher and Feldman Stanislav.
    :license: BSD, see LICENSE for more details.
"""
from jinja2 import TemplateSyntaxError

from squeezinja.minifier import INITIAL_STATE


class StreamProcessContext(object):
    '''
    Context which stores state information while processing a document.

    One context is created per document and must not be shared: it owns
    the :class:`~squeezinja.minifier.StreamState` carried from a fragment
    to the next.
    '''
    # pylint: disable=too-few-public-methods

    def __init__(self, minifier, stream=None):
        self.minifier = minifier
        self.stream = stream
        self.token = None
        self.state = INITIAL_STATE

    def markup(self, text):
        '''Minify a fragment of static markup.'''
        text, self.state = self.minifier.minify(text, self.state)
        return text

    def passthrough(self, text):
        '''Account for static markup written without being minified.'''
        self.state = self.minifier.advance(text, self.state)
        return text

    def dynamic(self):
        '''
        Account for text computed at render time. When we have dynamic
        markup we can't know if its last char will be whitespace, so the
        whitespace just after it is never fully removed.
        '''
        self.state = self.state.after_dynamic()

    def fail(self, message):
        '''Reraise errors as TemplateSyntaxErrors.'''
        name = filename = None
        if self.stream is not None:
            name, filename = self.stream.name, self.stream.filename
        raise TemplateSyntaxError(message, self.token.lineno, name, filename)


def minify_fragments(fragments, minifier):
    '''
    Minify a document given as ``(is_markup, text)`` pairs, yielding the
    rewritten pieces in order. Dynamic pieces are yielded untouched, and
    consecutive markup pieces are joined and minified as a single one.
    '''
    ctx = StreamProcessContext(minifier)
    pending = []
    for is_markup, text in fragments:
        if is_markup:
            pending.append(text)
            continue
        if pending:
            yield ctx.markup(u''.join(pending))
            pending = []
        ctx.dynamic()
        yield text
    if pending:
        yield ctx.markup(u''.join(pending))
