"""
html_style.py
Default inline stylesheet for standalone pages when no custom stylesheet URL is given.
"""

HTML_STYLE = """
<style>
    html {
        overflow-y: scroll;
        position: relative;
        min-height: 100%
    }

    body {
        font-family: "Roboto", "Helvetica Neue", Helvetica, Arial, sans-serif;
        color: #535f61
    }

    a {
        color: #466BB0;
        text-decoration: none;
        font-weight: 500
    }

    a:hover, a:focus {
        color: #8ba3d1;
        text-decoration: none;
        font-weight: 500
    }

    table, th, td {
        border: 1px solid #849396;
        padding: .3em
    }

    tr.oneof>td {
        border-bottom: 1px dashed #849396;
        border-top: 1px dashed #849396
    }

    table {
        border-collapse: collapse
    }

    th {
        color: #fff;
        background-color: #286AC7;
        font-weight: normal
    }

    p {
        font-size: 1rem;
        line-height: 1.5;
        margin: .25em 0
    }

    table p:first-of-type {
        margin-top: 0
    }

    table p:last-of-type {
        margin-bottom: 0
    }

    li, dt, dd {
        font-size: 1rem;
        line-height: 1.5;
        margin: .25em
    }

    ol, ul, dl {
        list-style: initial;
        font-size: 1rem;
        margin: 0 1.5em;
        padding: 0
    }

    ol {
        list-style: decimal
    }

    h1, h2, h3, h4, h5, h6 {
        border: 0;
        font-weight: normal
    }

    h1 {
        font-size: 2.5rem;
        color: #286AC7;
        margin: 30px 0
    }

    h2 {
        font-size: 2rem;
        color: #2E2E2E;
        margin: 30px 0 20px;
        padding-bottom: 10px;
        border-bottom: 1px solid #737373
    }

    h3, h4 {
        font-size: 1.85rem;
        font-weight: 500;
        color: #404040;
        margin: 30px 0 20px
    }

    em {
        font-style: italic
    }

    strong {
        font-weight: bold
    }

    blockquote {
        display: block;
        margin: 1em 3em;
        background-color: #f8f8f8
    }

    section {
        padding-left: 2em
    }

    code {
        color: red
    }

    .deprecated {
        background: silver
    }

    .experimental {
        background: yellow
    }
</style>
"""
