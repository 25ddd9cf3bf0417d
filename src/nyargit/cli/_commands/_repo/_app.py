from cyclopts import App

app = App(name="repo", help="Work with the git repository.")
