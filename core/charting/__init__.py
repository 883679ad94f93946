"""Chart rendering for the prediction debug page.

Renderers convert engine signals into `ChartDescriptor` values; the page
composer turns descriptors into one self-contained plotly HTML document.
"""
