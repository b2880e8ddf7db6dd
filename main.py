from nicegui import ui
import traceback

# ==============================================================================
# MODULE IMPORTS
# ==============================================================================
from ui.baccarat_lab import show_baccarat_lab
from ui.poker_table import show_poker_table

# ==============================================================================
# 1. APP CONFIGURATION
# ==============================================================================
ui.dark_mode().enable()

# ==============================================================================
# 2. CONTENT CONTAINER
# ==============================================================================
content = ui.column().classes('w-full items-center')

# --- SAFE LOADER DECORATOR ---
def safe_load(func):
    def wrapper():
        content.clear()
        try:
            with content:
                func()
        except Exception as e:
            ui.notify(f"Error loading module: {str(e)}", type='negative')
            print(traceback.format_exc())
            with content:
                ui.label(f"CRASH DETECTED IN MODULE").classes('text-red-500 text-2xl font-bold')
                ui.label(f"{str(e)}").classes('text-red-400')
                ui.label("Check server logs for details.").classes('text-slate-500')
    return wrapper

# --- PAGE LOADERS ---

@safe_load
def load_baccarat():
    show_baccarat_lab()

@safe_load
def load_poker():
    show_poker_table()

# ==============================================================================
# 3. LAYOUT & SIDEBAR
# ==============================================================================
with ui.header().classes('bg-slate-900 text-white shadow-lg items-center'):
    ui.button(icon='menu', on_click=lambda: left_drawer.toggle()).props('flat color=white')
    ui.label('CASINO TABLE LAB').classes('text-xl font-bold tracking-widest ml-2')

with ui.left_drawer(value=True).classes('bg-slate-800 text-white') as left_drawer:
    with ui.column().classes('w-full p-4 gap-4'):

        ui.label('TABLES').classes('text-slate-500 text-xs font-bold tracking-wider')
        with ui.column().classes('gap-2 w-full'):
            ui.button('BACCARAT MARTINGALE', icon='science', on_click=load_baccarat).props('flat align=left').classes('w-full text-amber-400 font-bold hover:bg-slate-700')
            ui.separator().classes('bg-slate-700 my-2 opacity-50')
            ui.button('THREE CARD POKER', icon='style', on_click=load_poker).props('flat align=left').classes('w-full text-slate-200 hover:bg-slate-700')

# ==============================================================================
# 4. INITIAL STARTUP
# ==============================================================================
load_baccarat()

if __name__ in {"__main__", "__mp_main__"}:
    ui.run(title='Casino Table Lab', port=8080, reload=True, favicon='♠️', show=True)
