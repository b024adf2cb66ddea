# -*- coding: utf-8 -*-
"""
    A Jinja2 extension that eliminates useless whitespace and comments at
    template compilation time without extra overhead.

    :copyright: (c) 2011 by Armin Ronacher and Feldman Stanislav.
    :license: BSD, see LICENSE for more details.
"""
import rcssmin
import rjsmin
from jinja2.ext import Extension
from jinja2.lexer import Token, describe_token

from squeezinja.minifier import HtmlMinifier, MinifierConfig
from squeezinja.stream import StreamProcessContext


def minify_javascript(code):
    '''Default minifier for inline scripts.'''
    return rjsmin.jsmin(code, keep_bang_comments=False)


def minify_stylesheet(code):
    '''Default minifier for inline styles.'''
    return rcssmin.cssmin(code, keep_bang_comments=False)


class HtmlCompressor(Extension):
    '''
    Compressor for a Jinja template which removes all excess spaces and
    comments similar to an HTML minifier.

    Only the static text of the template is rewritten. The minifier is
    configured through attributes of the environment, which can be changed
    until the templates are compiled::

        env = Environment(extensions=['squeezinja.HtmlCompressor'])
        env.html_minify_aggressive = False
        env.html_minify_js_hook = None
    '''
    # pylint: disable=abstract-method

    def __init__(self, environment):
        super(HtmlCompressor, self).__init__(environment)
        environment.extend(
            html_minify_aggressive=True,
            html_minify_comments=True,
            html_minify_javascript=True,
            html_minify_css=True,
            html_minify_js_hook=minify_javascript,
            html_minify_css_hook=minify_stylesheet,
        )

    def minifier(self):
        '''Build a minifier from the environment settings.'''
        env = self.environment
        return HtmlMinifier(MinifierConfig(
            comments=env.html_minify_comments,
            aggressive=env.html_minify_aggressive,
            javascript=env.html_minify_javascript,
            css=env.html_minify_css,
            minify_js=env.html_minify_js_hook,
            minify_css=env.html_minify_css_hook,
        ))

    def flush(self, tokens, ctx, minify=True):
        '''Merge consecutive data tokens into one, minified if requested.'''
        ctx.token = tokens[0]
        value = u''.join(token.value for token in tokens)
        if minify:
            value = ctx.markup(value)
        else:
            value = ctx.passthrough(value)
        return Token(ctx.token.lineno, 'data', value)

    def filter_stream(self, stream):
        '''Process all elements in a lexed string.'''
        ctx = StreamProcessContext(self.minifier(), stream)
        pending = []
        for token in stream:
            if token.type == 'data':
                pending.append(token)
                continue
            if pending:
                yield self.flush(pending, ctx)
                pending = []
            # Don't process Jinja tags
            ctx.dynamic()
            yield token
        if pending:
            yield self.flush(pending, ctx)


class SelectiveHtmlCompressor(HtmlCompressor):
    '''
    Compressor for a Jinja template which removes all excess spaces similar to
    an HTML minifier within {% strip %} and {% endstrip %} tags.
    '''
    # pylint: disable=abstract-method

    def filter_stream(self, stream):
        '''Process all elements in a lexed string between strip tags.'''
        ctx = StreamProcessContext(self.minifier(), stream)
        strip_depth = 0
        pending = []
        tokens = iter(stream)
        for token in tokens:
            if token.type == 'data':
                pending.append(token)
                continue
            if token.type == 'block_begin' and \
                    stream.current.test_any('name:strip', 'name:endstrip'):
                stripping = strip_depth > 0
                ctx.token = next(tokens)
                if ctx.token.value == 'strip':
                    strip_depth += 1
                else:
                    strip_depth -= 1
                    if strip_depth < 0:
                        ctx.fail('Unexpected tag endstrip')
                ctx.token = next(tokens)
                if ctx.token.type != 'block_end':
                    ctx.fail('expected end of block, got %s' %
                             describe_token(ctx.token))
                # Nested markers don't split the text around them
                if pending and stripping != (strip_depth > 0):
                    yield self.flush(pending, ctx, stripping)
                    pending = []
                continue
            if pending:
                yield self.flush(pending, ctx, strip_depth > 0)
                pending = []
            ctx.dynamic()
            yield token
        if pending:
            yield self.flush(pending, ctx, strip_depth > 0)
