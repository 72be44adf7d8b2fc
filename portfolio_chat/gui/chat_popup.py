import asyncio
import threading
import tkinter as tk
from tkinter import scrolledtext

from portfolio_chat.api.service import ChatSession, create_session


class App:
    def __init__(self, root, session: ChatSession):
        self.root = root
        self.root.title("Portfolio")
        self.session = session
        self.widget = session.widget
        self.loop = asyncio.new_event_loop()
        threading.Thread(target=self.loop.run_forever, daemon=True).start()
        self.popup = None
        tk.Button(root, text="Chat", command=self.on_toggle).pack(side=tk.BOTTOM, anchor=tk.E, padx=12, pady=12)
        # store/coordinator 的通知可能来自事件循环线程，统一切回 Tk 线程重绘
        self.widget.subscribe(lambda: self.root.after(0, self.redraw))

    def on_toggle(self):
        # 所有 store 变更都在事件循环线程上执行
        self.loop.call_soon_threadsafe(self._toggle)

    def _toggle(self):
        self.widget.toggle()
        self.root.after(0, self._sync_popup)

    def _sync_popup(self):
        if self.widget.is_open and self.popup is None:
            self._build_popup()
        elif not self.widget.is_open and self.popup is not None:
            self.popup.destroy()
            self.popup = None
        self.redraw()

    def _build_popup(self):
        self.popup = tk.Toplevel(self.root)
        self.popup.title("Assistant – Portfolio")
        self.popup.protocol("WM_DELETE_WINDOW", self.on_toggle)
        self.chat = scrolledtext.ScrolledText(self.popup, width=60, height=20, wrap=tk.WORD)
        self.chat.pack(fill=tk.BOTH, expand=True)
        self.chat.tag_config("user", foreground="#1a73e8", justify=tk.RIGHT)
        self.chat.tag_config("bot", foreground="#34a853")
        row = tk.Frame(self.popup)
        row.pack(fill=tk.X)
        self.entry = tk.Entry(row)
        self.entry.pack(side=tk.LEFT, fill=tk.X, expand=True)
        self.entry.bind("<Return>", self.on_send_event)
        self.send_btn = tk.Button(row, text=self.widget.submit_label, command=self.on_send)
        self.send_btn.pack(side=tk.LEFT)

    def on_send(self):
        self.widget.set_input(self.entry.get())
        self.loop.call_soon_threadsafe(self._submit)

    def _submit(self):
        if self.widget.submit() is not None:
            self.root.after(0, lambda: self.entry.delete(0, tk.END))

    def on_send_event(self, event):
        self.on_send()
        return "break"

    def redraw(self):
        if self.popup is None:
            return
        self.chat.config(state=tk.NORMAL)
        self.chat.delete(1.0, tk.END)
        for kind, content in self.widget.messages():
            self.chat.insert(tk.END, f"{content}\n\n", kind)
        self.chat.config(state=tk.DISABLED)
        self.chat.see(tk.END)
        state = tk.NORMAL if self.widget.input_enabled else tk.DISABLED
        self.entry.config(state=state)
        self.send_btn.config(text=self.widget.submit_label, state=state)


def main():
    root = tk.Tk()
    App(root, create_session())
    root.mainloop()


if __name__ == "__main__":
    main()
