from cyclopts import App

app = App(name="config", help="Inspect NyarGit configuration.")
