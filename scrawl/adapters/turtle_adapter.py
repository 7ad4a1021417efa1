"""
Draw on a tkinter canvas in a window of its own.
The window stays up until you click the drawing or press a key.
"""
import tkinter
from ..surface import PathSurface

class TkSurface(PathSurface):
	def __init__(self, width:int, height:int, title="Scrawl: Turtle Graphics"):
		super().__init__()
		self.root = root = tkinter.Tk()
		root.focus_force()
		root.title(title)
		self.canvas = tkinter.Canvas(root, width=width, height=height, background="white")
		self.canvas.pack()
		self.stroke_count = 0

	def draw_polyline(self, points):
		self.canvas.create_line(*[c for xy in points for c in xy])
		self.stroke_count += 1

	def draw_disc(self, x, y, radius, start, end):
		self.canvas.create_oval(x-radius, y-radius, x+radius, y+radius, fill="black", outline="")

	def clear_rect(self, x, y, width, height):
		self.canvas.create_rectangle(x, y, x+width, y+height, fill="white", outline="")

	def finish(self):
		self.canvas.update()
		text = str(self.stroke_count) + " strokes. Click the drawing or press any key to dismiss it."
		print(text)
		root = self.root
		label = tkinter.Label(root, text=text)
		label.pack()
		root.bind("<ButtonRelease>", lambda event:root.destroy())
		root.bind("<KeyPress>", lambda event:root.destroy())
		tkinter.mainloop()
