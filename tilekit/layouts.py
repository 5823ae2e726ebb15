"""Arrange functions for tiled clients, with gaps.

Each layout is called as ``layout(wm, monitor)`` and places the
monitor's visible, non-floating clients through ``wm.resize``. Integer
arithmetic follows the fixed-width rules that the geometry was designed
around: divisions truncate toward zero and a few counters wrap as
32-bit unsigned values.
"""

__all__ = [
    "get_gaps",
    "monocle",
    "tile",
    "bstack",
    "bstackhoriz",
    "centeredmaster",
    "centeredfloatingmaster",
    "deck",
    "fibonacci",
    "dwindle",
    "spiral",
    "grid",
    "gaplessgrid",
    "horizgrid",
    "nrowgrid",
]

_U32 = 0xFFFFFFFF
_LTSYMBOL_MAX = 15
FORCE_VSPLIT = True


def _u32(value):
    return value & _U32


def _s32(value):
    value &= _U32
    return value - (1 << 32) if value & 0x80000000 else value


def _ult(a, b):
    """``a < b`` compared as 32-bit unsigned values."""
    return _u32(a) < _u32(b)


def _cdiv(a, b):
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q


def get_gaps(wm, monitor):
    """Return ``(oh, ov, ih, iv, n)``: effective gaps and tiled-client count.

    Outer gaps vanish when smart gaps are on and only one client is tiled.
    """
    n = len(monitor.tiled())
    oe = ie = 1 if wm.enablegaps else 0
    if wm.settings.smartgaps and n == 1:
        oe = 0
    return (monitor.gappoh * oe, monitor.gappov * oe,
            monitor.gappih * ie, monitor.gappiv * ie, n)


def _facts(monitor, n, msize, ssize):
    """Master and stack factors and the pixels left over after an even split."""
    nmaster = monitor.nmaster
    mfacts = float(min(n, nmaster))
    sfacts = float(_u32(n - nmaster))
    mtotal = stotal = 0
    for i in range(n):
        if i < nmaster:
            mtotal = int(mtotal + msize / mfacts)
        else:
            stotal = int(stotal + ssize / sfacts)
    return mfacts, sfacts, msize - mtotal, ssize - stotal


def _set_symbol(monitor, symbol):
    monitor.ltsymbol = symbol[:_LTSYMBOL_MAX]


def monocle(wm, monitor):
    """Every tiled client fills the whole window area."""
    m = monitor
    n = sum(1 for c in m.clients if m.is_visible(c))
    if n > 0:
        _set_symbol(m, f"[{n}]")
    for c in m.tiled():
        wm.resize(c, m.wx, m.wy, m.ww - 2 * c.bw, m.wh - 2 * c.bw, False)


def tile(wm, monitor):
    """Master column on the left, stack column on the right."""
    m = monitor
    oh, ov, ih, iv, n = get_gaps(wm, m)
    if n == 0:
        return
    nm = m.nmaster
    sx = mx = m.wx + ov
    sy = my = m.wy + oh
    mh = m.wh - 2 * oh - ih * (min(n, nm) - 1)
    sh = m.wh - 2 * oh - ih * (n - nm - 1)
    sw = mw = m.ww - 2 * ov
    if nm and n > nm:
        sw = int((mw - iv) * (1 - m.mfact))
        mw = mw - iv - sw
        sx = mx + mw + iv
    mfacts, sfacts, mrest, srest = _facts(m, n, mh, sh)
    for i, c in enumerate(m.tiled()):
        if i < nm:
            wm.resize(c, mx, my, mw - 2 * c.bw,
                      int(mh / mfacts + (1 if _ult(i, mrest) else 0) - 2 * c.bw), False)
            my += c.height + ih
        else:
            wm.resize(c, sx, sy, sw - 2 * c.bw,
                      int(sh / sfacts + (1 if _ult(i - nm, srest) else 0) - 2 * c.bw), False)
            sy += c.height + ih


def bstack(wm, monitor):
    """Master row on top, stack row below, clients side by side."""
    m = monitor
    oh, ov, ih, iv, n = get_gaps(wm, m)
    if n == 0:
        return
    nm = m.nmaster
    sx = mx = m.wx + ov
    sy = my = m.wy + oh
    sh = mh = m.wh - 2 * oh
    mw = m.ww - 2 * ov - iv * (min(n, nm) - 1)
    sw = m.ww - 2 * ov - iv * (n - nm - 1)
    if nm and n > nm:
        sh = int((mh - ih) * (1 - m.mfact))
        mh = mh - ih - sh
        sx = mx
        sy = my + mh + ih
    mfacts, sfacts, mrest, srest = _facts(m, n, mw, sw)
    for i, c in enumerate(m.tiled()):
        if i < nm:
            wm.resize(c, mx, my,
                      int(mw / mfacts + (1 if _ult(i, mrest) else 0) - 2 * c.bw),
                      mh - 2 * c.bw, False)
            mx += c.width + iv
        else:
            wm.resize(c, sx, sy,
                      int(sw / sfacts + (1 if _ult(i - nm, srest) else 0) - 2 * c.bw),
                      sh - 2 * c.bw, False)
            sx += c.width + iv


def bstackhoriz(wm, monitor):
    """Master row on top, stack clients stacked vertically below."""
    m = monitor
    oh, ov, ih, iv, n = get_gaps(wm, m)
    if n == 0:
        return
    nm = m.nmaster
    sx = mx = m.wx + ov
    sy = my = m.wy + oh
    mh = m.wh - 2 * oh
    sh = m.wh - 2 * oh - ih * (n - nm - 1)
    mw = m.ww - 2 * ov - iv * (min(n, nm) - 1)
    sw = m.ww - 2 * ov
    if nm and n > nm:
        sh = int((mh - ih) * (1 - m.mfact))
        mh = mh - ih - sh
        sy = my + mh + ih
        sh = m.wh - mh - 2 * oh - ih * (n - nm)
    mfacts, sfacts, mrest, srest = _facts(m, n, mw, sh)
    for i, c in enumerate(m.tiled()):
        if i < nm:
            wm.resize(c, mx, my,
                      int(mw / mfacts + (1 if _ult(i, mrest) else 0) - 2 * c.bw),
                      mh - 2 * c.bw, False)
            mx += c.width + iv
        else:
            wm.resize(c, sx, sy, sw - 2 * c.bw,
                      int(sh / sfacts + (1 if _ult(i - nm, srest) else 0) - 2 * c.bw), False)
            sy += c.height + ih


def centeredmaster(wm, monitor):
    """Master column in the centre with stack columns on both sides."""
    m = monitor
    oh, ov, ih, iv, n = get_gaps(wm, m)
    if n == 0:
        return
    nm = m.nmaster
    rest = n - nm
    half = rest // 2 if rest >= 0 else 0
    odd = rest % 2 if rest >= 0 else 0
    mx = m.wx + ov
    my = m.wy + oh
    mh = m.wh - 2 * oh - ih * ((n if not nm else min(n, nm)) - 1)
    mw = m.ww - 2 * ov
    lh = m.wh - 2 * oh - ih * (half - 1)
    rh = m.wh - 2 * oh - ih * (half - (0 if odd else 1))
    lx = ly = lw = 0
    rx = ry = rw = 0

    if nm and n > nm:
        if n - nm > 1:
            mw = int((m.ww - 2 * ov - 2 * iv) * m.mfact)
            lw = _cdiv(m.ww - mw - 2 * ov - 2 * iv, 2)
            rw = (m.ww - mw - 2 * ov - 2 * iv) - lw
            mx += lw + iv
        else:
            mw = int((mw - iv) * m.mfact)
            lw = 0
            rw = m.ww - mw - iv - 2 * ov
        lx = m.wx + ov
        ly = m.wy + oh
        rx = mx + mw + iv
        ry = m.wy + oh

    tiled = m.tiled()
    mfacts = lfacts = rfacts = 0.0
    for k in range(len(tiled)):
        if not nm or k < nm:
            mfacts += 1
        elif (k - nm) % 2:
            lfacts += 1
        else:
            rfacts += 1

    mtotal = ltotal = rtotal = 0
    for k in range(len(tiled)):
        if not nm or k < nm:
            mtotal = int(mtotal + mh / mfacts)
        elif (k - nm) % 2:
            ltotal = int(ltotal + lh / lfacts)
        else:
            rtotal = int(rtotal + rh / rfacts)
    mrest = mh - mtotal
    lrest = lh - ltotal
    rrest = rh - rtotal

    for i, c in enumerate(tiled):
        if not nm or i < nm:
            wm.resize(c, mx, my, mw - 2 * c.bw,
                      int(mh / mfacts + (1 if _ult(i, mrest) else 0) - 2 * c.bw), False)
            my += c.height + ih
        elif (i - nm) % 2:
            extra = 1 if _ult(i - 2 * nm, 2 * lrest) else 0
            wm.resize(c, lx, ly, lw - 2 * c.bw,
                      int(lh / lfacts + extra - 2 * c.bw), False)
            ly += c.height + ih
        else:
            extra = 1 if _ult(i - 2 * nm, 2 * rrest) else 0
            wm.resize(c, rx, ry, rw - 2 * c.bw,
                      int(rh / rfacts + extra - 2 * c.bw), False)
            ry += c.height + ih


def centeredfloatingmaster(wm, monitor):
    """Stack row across the screen with a master box centred over it."""
    m = monitor
    oh, ov, ih, iv, n = get_gaps(wm, m)
    if n == 0:
        return
    nm = m.nmaster
    mivf = 1.0
    sx = mx = m.wx + ov
    sy = my = m.wy + oh
    sh = mh = m.wh - 2 * oh
    mw = m.ww - 2 * ov - iv * (n - 1)
    sw = m.ww - 2 * ov - iv * (n - nm - 1)

    if nm and n > nm:
        mivf = 0.8
        if m.ww > m.wh:
            mw = int(m.ww * m.mfact - iv * mivf * (min(n, nm) - 1))
            mh = int(m.wh * 0.9)
        else:
            mw = int(m.ww * 0.9 - iv * mivf * (min(n, nm) - 1))
            mh = int(m.wh * m.mfact)
        mx = m.wx + _cdiv(m.ww - mw, 2)
        my = m.wy + _cdiv(m.wh - mh - 2 * oh, 2)
        sx = m.wx + ov
        sy = m.wy + oh
        sh = m.wh - 2 * oh

    mfacts, sfacts, mrest, srest = _facts(m, n, mw, sw)
    for i, c in enumerate(m.tiled()):
        if i < nm:
            wm.resize(c, mx, my,
                      int(mw / mfacts + (1 if _ult(i, mrest) else 0) - 2 * c.bw),
                      mh - 2 * c.bw, False)
            mx = int(mx + c.width + iv * mivf)
        else:
            wm.resize(c, sx, sy,
                      int(sw / sfacts + (1 if _ult(i - nm, srest) else 0) - 2 * c.bw),
                      sh - 2 * c.bw, False)
            sx += c.width + iv


def deck(wm, monitor):
    """Master column on the left; stack clients share one area on the right."""
    m = monitor
    oh, ov, ih, iv, n = get_gaps(wm, m)
    if n == 0:
        return
    nm = m.nmaster
    sx = mx = m.wx + ov
    sy = my = m.wy + oh
    sh = mh = m.wh - 2 * oh - ih * (min(n, nm) - 1)
    sw = mw = m.ww - 2 * ov
    if nm and n > nm:
        sw = int((mw - iv) * (1 - m.mfact))
        mw = mw - iv - sw
        sx = mx + mw + iv
        sh = m.wh - 2 * oh

    mfacts, _sfacts, mrest, _srest = _facts(m, n, mh, sh)

    if _u32(n - nm) > 0:
        _set_symbol(m, f"D {_s32(n - nm)}")

    for i, c in enumerate(m.tiled()):
        if i < nm:
            wm.resize(c, mx, my, mw - 2 * c.bw,
                      int(mh / mfacts + (1 if _ult(i, mrest) else 0) - 2 * c.bw), False)
            my += c.height + ih
        else:
            wm.resize(c, sx, sy, sw - 2 * c.bw, sh - 2 * c.bw, False)


def fibonacci(wm, monitor, s):
    """Split the remaining area in half for each client.

    A true ``s`` gives the dwindle arrangement, a false one the spiral.
    """
    m = monitor
    oh, ov, ih, iv, n = get_gaps(wm, m)
    if n == 0:
        return
    bh = wm.bar_height
    nx = m.wx + ov
    ny = m.wy + oh
    nw = m.ww - 2 * ov
    nh = m.wh - 2 * oh
    hrest = wrest = 0
    r = True
    i = 0

    for c in m.tiled():
        if r:
            if ((i % 2 and _cdiv(nh - ih, 2) <= bh + 2 * c.bw)
                    or (not i % 2 and _cdiv(nw - iv, 2) <= bh + 2 * c.bw)):
                r = False
            if r and i < n - 1:
                if i % 2:
                    nv = _cdiv(nh - ih, 2)
                    hrest = nh - 2 * nv - ih
                    nh = nv
                else:
                    nv = _cdiv(nw - iv, 2)
                    wrest = nw - 2 * nv - iv
                    nw = nv
                if i % 4 == 2 and not s:
                    nx += nw + iv
                elif i % 4 == 3 and not s:
                    ny += nh + ih

            quarter = i % 4
            if quarter == 0:
                if s:
                    ny += nh + ih
                    nh += hrest
                else:
                    nh -= hrest
                    ny -= nh + ih
            elif quarter == 1:
                nx += nw + iv
                nw += wrest
            elif quarter == 2:
                ny += nh + ih
                nh += hrest
                if i < n - 1:
                    nw += wrest
            else:
                if s:
                    nx += nw + iv
                    nw -= wrest
                else:
                    nw -= wrest
                    nx -= nw + iv
                    nh += hrest

            if i == 0:
                if n != 1:
                    span = m.ww - iv - 2 * ov
                    nw = int(span - span * (1 - m.mfact))
                    wrest = 0
                ny = m.wy + oh
            elif i == 1:
                nw = m.ww - nw - iv - 2 * ov
            i += 1

        wm.resize(c, nx, ny, nw - 2 * c.bw, nh - 2 * c.bw, False)


def dwindle(wm, monitor):
    """Fibonacci split shrinking toward the bottom right."""
    fibonacci(wm, monitor, True)


def spiral(wm, monitor):
    """Fibonacci split winding around the centre."""
    fibonacci(wm, monitor, False)


def grid(wm, monitor):
    """Clients in a near-square grid, filled column by column."""
    m = monitor
    oh, ov, ih, iv, n = get_gaps(wm, m)
    rows = 0
    while rows <= n // 2:
        if rows * rows >= n:
            break
        rows += 1
    cols = rows - 1 if rows and (rows - 1) * rows >= n else rows

    hspan = m.wh - 2 * oh - ih * (rows - 1)
    wspan = m.ww - 2 * ov - iv * (cols - 1)
    ch = _cdiv(hspan, rows or 1)
    cw = _cdiv(wspan, cols or 1)
    chrest = hspan - ch * rows
    cwrest = wspan - cw * cols
    for i, c in enumerate(m.tiled()):
        cc = i // rows
        cr = i % rows
        cx = m.wx + ov + cc * (cw + iv) + min(cc, cwrest)
        cy = m.wy + oh + cr * (ch + ih) + min(cr, chrest)
        wm.resize(c, cx, cy,
                  cw + (1 if cc < cwrest else 0) - 2 * c.bw,
                  ch + (1 if cr < chrest else 0) - 2 * c.bw, False)


def gaplessgrid(wm, monitor):
    """Grid whose last columns take one extra row so no cell stays empty."""
    m = monitor
    oh, ov, ih, iv, n = get_gaps(wm, m)
    if n == 0:
        return
    cols = 0
    while cols <= n // 2:
        if cols * cols >= n:
            break
        cols += 1
    if n == 5:
        cols = 2
    rows = n // cols
    cn = rn = 0

    ch = _cdiv(m.wh - 2 * oh - ih * (rows - 1), rows)
    cw = _cdiv(m.ww - 2 * ov - iv * (cols - 1), cols)
    rrest = (m.wh - 2 * oh - ih * (rows - 1)) - ch * rows
    crest = (m.ww - 2 * ov - iv * (cols - 1)) - cw * cols
    x = m.wx + ov
    y = m.wy + oh

    for i, c in enumerate(m.tiled()):
        if i // rows + 1 > cols - n % cols:
            rows = n // cols + 1
            ch = _cdiv(m.wh - 2 * oh - ih * (rows - 1), rows)
            rrest = (m.wh - 2 * oh - ih * (rows - 1)) - ch * rows
        wm.resize(c,
                  x,
                  y + rn * (ch + ih) + min(rn, rrest),
                  cw + (1 if cn < crest else 0) - 2 * c.bw,
                  ch + (1 if rn < rrest else 0) - 2 * c.bw,
                  False)
        rn += 1
        if rn >= rows:
            rn = 0
            x += cw + ih + (1 if cn < crest else 0)
            cn += 1


def horizgrid(wm, monitor):
    """Two rows of clients side by side; the top row holds half of them."""
    m = monitor
    oh, ov, ih, iv, n = get_gaps(wm, m)
    if n == 0:
        return
    nbottom = 1
    if n <= 2:
        ntop = n
    else:
        ntop = n // 2
        nbottom = n - ntop
    sx = mx = m.wx + ov
    sy = my = m.wy + oh
    sh = mh = m.wh - 2 * oh
    sw = mw = m.ww - 2 * ov

    if n > ntop:
        sh = _cdiv(mh - ih, 2)
        mh = mh - ih - sh
        sy = my + mh + ih
        mw = m.ww - 2 * ov - iv * (ntop - 1)
        sw = m.ww - 2 * ov - iv * (nbottom - 1)

    mfacts = float(ntop)
    sfacts = float(nbottom)
    mrest = mw - _cdiv(mw, ntop) * ntop
    srest = sw - _cdiv(sw, nbottom) * nbottom

    for i, c in enumerate(m.tiled()):
        if i < ntop:
            wm.resize(c, mx, my,
                      int(mw / mfacts + (1 if _ult(i, mrest) else 0) - 2 * c.bw),
                      mh - 2 * c.bw, False)
            mx += c.width + iv
        else:
            wm.resize(c, sx, sy,
                      int(sw / sfacts + (1 if _ult(i - ntop, srest) else 0) - 2 * c.bw),
                      sh - 2 * c.bw, False)
            sx += c.width + iv


def nrowgrid(wm, monitor):
    """``nmaster + 1`` rows of clients; two clients always split vertically."""
    m = monitor
    oh, ov, ih, iv, n = get_gaps(wm, m)
    if n == 0:
        return
    rows = _u32(m.nmaster + 1)
    if FORCE_VSPLIT and n == 2:
        rows = 1
    if n < rows:
        rows = n

    cols = n // rows
    uc = cols
    uw = 0
    cy = _u32(m.wy + oh)
    ch = _u32(m.wh - 2 * oh - ih * (rows - 1)) // rows
    uh = ch
    ri = ci = 0

    for c in m.tiled():
        if ci == cols:
            uw = 0
            ci = 0
            ri += 1
            cols = (n - uc) // (rows - ri)
            uc += cols
            cy = _u32(m.wy + oh + uh + ih)
            uh = _u32(uh + ch + ih)
        cx = _u32(m.wx + ov + uw)
        cw = _u32(m.ww - 2 * ov - uw) // (cols - ci)
        uw = _u32(uw + cw + iv)
        wm.resize(c, _s32(cx), _s32(cy), _s32(cw - 2 * c.bw), _s32(ch - 2 * c.bw), False)
        ci += 1