"""Built-in dataset used when every remote source fails."""

SAMPLE_CSV = """\
Date,Estimate,5th Percentile,95th Percentile
1/15/2024,45,28,65
2/15/2024,48,32,68
3/15/2024,42,25,62
4/15/2024,38,22,58
5/15/2024,35,20,55
6/15/2024,32,18,52
7/15/2024,28,15,48
8/15/2024,25,12,42
9/15/2024,22,10,38
10/15/2024,35,20,55
11/15/2024,68,45,85
12/15/2024,52,38,74
1/15/2025,42,28,62
2/15/2025,38,25,58
3/15/2025,40,26,60
"""
