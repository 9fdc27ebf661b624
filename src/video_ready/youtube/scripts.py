"""Page scripts evaluated against the YouTube watch page.

Predicates return a boolean and have no side effects. Action scripts are run
best-effort and their results are ignored.
"""

# ── Predicates ──────────────────────────────────────────────────────────────

AD_SHOWING_JS = """(function(){
    var p=document.getElementById('movie_player');
    return p ? p.classList.contains('ad-showing') : false;
})()"""

HAS_VIDEO_JS = "document.querySelector('video') !== null"

# readyState 3 = HAVE_FUTURE_DATA
PLAYING_JS = """(function(){
    var v=document.querySelector('video');
    return !!v && v.readyState>=3 && !v.paused;
})()"""

PLAYBACK_DIAGNOSTIC_JS = """(function(){
    var v=document.querySelector('video');
    if(!v) return 'no video element';
    return 'readyState='+v.readyState+' paused='+v.paused+' src='+(v.src||v.currentSrc||'none');
})()"""

# ── Actions ─────────────────────────────────────────────────────────────────

KICK_PLAYBACK_JS = """(function(){
    var v=document.querySelector('video');
    if(v && v.paused){ v.muted=true; v.play().catch(function(){}); }
    var p=document.getElementById('movie_player');
    if(p && typeof p.playVideo==='function') p.playVideo();
})()"""

THEATER_MODE_JS = """(function(){
    var btn=document.querySelector('.ytp-size-button');
    if(btn) btn.click();
})()"""

HIDE_CONTROLS_JS = """(function(){
    var p=document.getElementById('movie_player');
    if(p) p.dispatchEvent(new MouseEvent('mouseleave',{bubbles:true}));
    document.body.dispatchEvent(new MouseEvent('mousemove',{clientX:0,clientY:0,bubbles:true}));
})()"""
