"""gistembed - embed GitHub gists referenced from Markdown.

Resolves inline ``gist:[user/]id[#file][?params]`` directives, fetches the
rendered gist and highlights, filters and shrinks its markup.
"""

__version__ = "0.1.0"
